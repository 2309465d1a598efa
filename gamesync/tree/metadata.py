"""
Metadata containers for games and folders.

Defines the gamelist metadata schemas and the ordered key/value store
attached to every node of the file tree.
"""

import re
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from lxml import etree


@dataclass(frozen=True)
class MetaDataDecl:
    """Declaration of a single metadata field."""
    key: str
    type: str  # string, multiline, path, rating, date, int, bool
    default: str = ""


GAME_METADATA: Tuple[MetaDataDecl, ...] = (
    MetaDataDecl("name", "string"),
    MetaDataDecl("sortname", "string"),
    MetaDataDecl("desc", "multiline"),
    MetaDataDecl("image", "path"),
    MetaDataDecl("thumbnail", "path"),
    MetaDataDecl("video", "path"),
    MetaDataDecl("marquee", "path"),
    MetaDataDecl("rating", "rating", "0"),
    MetaDataDecl("releasedate", "date", "not-a-date-time"),
    MetaDataDecl("developer", "string", "unknown"),
    MetaDataDecl("publisher", "string", "unknown"),
    MetaDataDecl("genre", "string", "unknown"),
    MetaDataDecl("players", "int", "1"),
    MetaDataDecl("favorite", "bool", "false"),
    MetaDataDecl("hidden", "bool", "false"),
    MetaDataDecl("kidgame", "bool", "false"),
    MetaDataDecl("playcount", "int", "0"),
    MetaDataDecl("lastplayed", "date", "not-a-date-time"),
)

FOLDER_METADATA: Tuple[MetaDataDecl, ...] = (
    MetaDataDecl("name", "string"),
    MetaDataDecl("sortname", "string"),
    MetaDataDecl("desc", "multiline"),
    MetaDataDecl("image", "path"),
    MetaDataDecl("thumbnail", "path"),
    MetaDataDecl("video", "path"),
    MetaDataDecl("marquee", "path"),
    MetaDataDecl("hidden", "bool", "false"),
)

# Elements owned by the gamelist entry itself rather than its metadata
_RESERVED_TAGS = {"path"}

_BRACKETED = re.compile(r"\([^)]*\)|\[[^\]]*\]")


def schema_for(kind) -> Tuple[MetaDataDecl, ...]:
    """Return the metadata schema used for a node kind."""
    from .file_node import FileType

    return FOLDER_METADATA if kind == FileType.FOLDER else GAME_METADATA


def clean_file_name(path: Union[str, Path]) -> str:
    """
    Derive the default display name for a file.

    Uses the file stem with every "(...)" and "[...]" group removed, so
    "Super Mario Bros. (USA) [!].nes" becomes "Super Mario Bros.".

    Args:
        path: File or folder path

    Returns:
        Cleaned name
    """
    stem = Path(path).stem
    return _BRACKETED.sub("", stem).strip()


class MetaDataList:
    """
    Ordered metadata store for a single game or folder.

    Only explicitly set keys are stored; ``get`` falls back to the schema
    default for keys that were never set. Unknown gamelist fields are kept
    as extra elements so a rewrite does not drop them.
    """

    def __init__(self, schema: Tuple[MetaDataDecl, ...] = GAME_METADATA):
        self.schema = schema
        self._values: Dict[str, str] = {}
        self.extra_fields: List[etree._Element] = []

    @classmethod
    def with_name(cls, schema: Tuple[MetaDataDecl, ...], name: str) -> 'MetaDataList':
        """Create a metadata list holding only a name."""
        metadata = cls(schema)
        metadata.set("name", name)
        return metadata

    @classmethod
    def from_xml(cls, schema: Tuple[MetaDataDecl, ...], entry: etree._Element) -> 'MetaDataList':
        """
        Build metadata from a <game> or <folder> element.

        Args:
            schema: Schema describing known fields
            entry: Gamelist entry element

        Returns:
            MetaDataList populated from the entry
        """
        metadata = cls(schema)
        known = {decl.key for decl in schema}

        # first occurrence of a known field wins, later duplicates are dropped
        for decl in schema:
            elem = entry.find(decl.key)
            if elem is not None and elem.text:
                metadata.set(decl.key, elem.text)

        for child in entry:
            if not isinstance(child.tag, str):
                # Comments and processing instructions
                continue
            if child.tag in _RESERVED_TAGS or child.tag in known:
                continue
            metadata.extra_fields.append(deepcopy(child))

        return metadata

    def append_to_xml(self, entry: etree._Element, include_defaults: bool) -> None:
        """
        Write metadata as child elements of an entry.

        Args:
            entry: Element to append to
            include_defaults: Write values even when they equal the schema default
        """
        for decl in self.schema:
            if decl.key not in self._values:
                continue
            value = self._values[decl.key]
            if not include_defaults and value == decl.default:
                continue
            elem = etree.SubElement(entry, decl.key)
            elem.text = value

        for extra in self.extra_fields:
            entry.append(deepcopy(extra))

    def get(self, key: str) -> str:
        if key in self._values:
            return self._values[key]
        for decl in self.schema:
            if decl.key == key:
                return decl.default
        return ""

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def keys(self) -> Iterator[str]:
        return iter(self._values)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"MetaDataList({self._values!r}, extra={[e.tag for e in self.extra_fields]!r})"
