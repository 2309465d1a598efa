"""
Gamelist synchronization.

Loads gamelist.xml entries into a system's file tree and merges the
tree's metadata back into the document. Writing re-reads the existing
document and only replaces entries for nodes the tree knows about, so
entries for files the tree has never seen are kept as they are.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from lxml import etree

from gamesync.config.settings import GamelistSettings
from gamesync.errors import (
    DocumentParseError,
    DocumentSaveError,
    GamelistError,
    MissingRootNode,
    PathResolutionError,
)
from gamesync.system import GameSystem
from gamesync.tree.file_node import FileNode, FileType
from gamesync.tree.filesystem import FileSystem
from gamesync.tree.metadata import MetaDataList, clean_file_name, schema_for
from .backup import GamelistBackup
from .resolver import TreeResolver

logger = logging.getLogger(__name__)

ROOT_TAG = "gameList"

# Entries are processed games first, then folders
ENTRY_TYPES = (("game", FileType.GAME), ("folder", FileType.FOLDER))


@dataclass
class SyncReport:
    """Outcome of a single load or write pass for one system."""
    system: str
    loaded: int = 0
    skipped: int = 0
    written: int = 0
    replaced: int = 0
    omitted: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GamelistSynchronizer:
    """
    Keeps a system's gamelist.xml and file tree consistent.

    Features:
    - Load entries into the tree, creating missing game nodes
    - Rewrite entries for every live tree node
    - Keep entries the tree does not account for
    - Skip entries that carry nothing but the default name
    """

    def __init__(
        self,
        settings: Optional[GamelistSettings] = None,
        filesystem: Optional[FileSystem] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize synchronizer.

        Args:
            settings: Gamelist settings (write suppression, path style, backups)
            filesystem: Filesystem collaborator
            log: Logger for per-entry and per-system messages
        """
        self.settings = settings or GamelistSettings()
        self.filesystem = filesystem or FileSystem()
        self.log = log or logger

    def parse_gamelist(self, system: GameSystem) -> SyncReport:
        """
        Load a system's gamelist.xml into its file tree.

        A missing gamelist is not an error. Entries pointing at missing
        files or outside the system folder are skipped individually.

        Args:
            system: System whose tree receives the entries

        Returns:
            SyncReport with loaded/skipped counts
        """
        report = SyncReport(system.name)
        xml_path = system.gamelist_path

        if not self.filesystem.exists(xml_path):
            return report

        self.log.info(f'Parsing XML file "{xml_path}"...')

        try:
            if system.tree is None:
                raise MissingRootNode(f'Found no root folder for system "{system.name}"!')
            root = self._load_document(xml_path).getroot()
        except GamelistError as e:
            self.log.error(str(e))
            report.error = str(e)
            return report

        resolver = TreeResolver(system.tree, self.filesystem, self.log)

        for tag, kind in ENTRY_TYPES:
            for entry in root.iterchildren(tag):
                if self._load_entry(entry, tag, kind, system, resolver):
                    report.loaded += 1
                else:
                    report.skipped += 1

        self.log.info(
            f"Loaded {report.loaded} entries for {system.name} ({report.skipped} skipped)"
        )
        return report

    def _load_entry(
        self,
        entry: etree._Element,
        tag: str,
        kind: FileType,
        system: GameSystem,
        resolver: TreeResolver
    ) -> bool:
        path = self._entry_path(entry, system)
        if path is None:
            self.log.warning(f"<{tag}> node contains no <path> child! Ignoring.")
            return False

        if not self.filesystem.exists(path):
            self.log.warning(f'File "{path}" does not exist! Ignoring.')
            return False

        try:
            node = resolver.resolve_or_create(path, kind)
        except PathResolutionError as e:
            self.log.warning(f"{e}, skipping.")
            return False

        if node is None:
            self.log.error(f'Error finding/creating FileData for "{path}", skipping.')
            return False

        default_name = node.metadata.get("name")
        node.metadata = MetaDataList.from_xml(schema_for(node.kind), entry)

        # make sure name gets set if one didn't exist
        if not node.metadata.get("name"):
            node.metadata.set("name", default_name)

        return True

    def update_gamelist(self, system: GameSystem) -> SyncReport:
        """
        Merge the system's file tree into its gamelist.xml.

        The existing document is re-read so entries the tree doesn't know
        about survive. Every game and folder in the tree has its old entry
        removed and a fresh one appended.

        Args:
            system: System to write

        Returns:
            SyncReport with written/replaced/omitted counts
        """
        report = SyncReport(system.name)

        if self.settings.writes_suppressed:
            self.log.debug(f"Gamelist writes disabled, not updating {system.name}")
            return report

        xml_path = system.gamelist_path

        try:
            if self.filesystem.exists(xml_path):
                document = self._load_document(xml_path)
            else:
                document = etree.ElementTree(etree.Element(ROOT_TAG))
                # the later save fails if the folders leading up to it are missing
                try:
                    self.filesystem.create_directories(xml_path.parent)
                except OSError as e:
                    raise DocumentSaveError(
                        f'Could not create gamelist folder "{xml_path.parent}": {e}'
                    ) from e

            if system.tree is None:
                raise MissingRootNode(f'Found no root folder for system "{system.name}"!')

            root = document.getroot()
            existing = self._index_entries(root, system)

            for node in system.tree.files_recursive(FileType.GAME | FileType.FOLDER):
                match = self._pop_matching_entry(existing.get(node.tag, []), node)
                if match is not None:
                    root.remove(match)
                    report.replaced += 1

                if self._add_file_data_node(root, node, system):
                    report.written += 1
                else:
                    report.omitted += 1

            self._save_document(document, xml_path)
        except GamelistError as e:
            self.log.error(str(e))
            report.error = str(e)
            return report

        self.log.info(
            f"Wrote {report.written} entries to {xml_path} "
            f"({report.replaced} replaced, {report.omitted} default-only omitted)"
        )
        return report

    def _index_entries(
        self,
        root: etree._Element,
        system: GameSystem
    ) -> Dict[str, List[tuple]]:
        """Collect (entry, declared path) pairs per tag in document order."""
        index: Dict[str, List[tuple]] = {}
        for tag, _ in ENTRY_TYPES:
            pairs = []
            for entry in root.iterchildren(tag):
                path = self._entry_path(entry, system)
                if path is None:
                    self.log.error(f"<{tag}> node contains no <path> child!")
                    continue
                pairs.append((entry, path))
            index[tag] = pairs
        return index

    def _pop_matching_entry(
        self,
        candidates: List[tuple],
        node: FileNode
    ) -> Optional[etree._Element]:
        """Remove and return the first entry whose path refers to node."""
        for position, (entry, path) in enumerate(candidates):
            if self._same_file(path, node.path):
                del candidates[position]
                return entry
        return None

    def _same_file(self, entry_path: Path, node_path: Path) -> bool:
        if entry_path == node_path:
            return True

        fs = self.filesystem
        if not (fs.exists(entry_path) and fs.exists(node_path)):
            return False

        try:
            return fs.equivalent(entry_path, node_path)
        except OSError as e:
            self.log.debug(f"Could not compare {entry_path} and {node_path}: {e}")
            return False

    def _add_file_data_node(
        self,
        parent: etree._Element,
        node: FileNode,
        system: GameSystem
    ) -> bool:
        """
        Append a fresh entry for node under parent.

        Returns:
            False if the entry held nothing but the default name and was dropped
        """
        entry = etree.SubElement(parent, node.tag)
        node.metadata.append_to_xml(entry, include_defaults=True)

        children = list(entry)
        if (
            len(children) == 1
            and children[0].tag == "name"
            and (children[0].text or "") == clean_file_name(node.path)
        ):
            # the only info is the default name, don't bother with this entry
            parent.remove(entry)
            return False

        path_elem = etree.Element("path")
        path_elem.text = self._format_path(node.path, system)
        entry.insert(0, path_elem)
        return True

    def _format_path(self, path: Path, system: GameSystem) -> str:
        """Render a node path as written to <path>."""
        if self.settings.relative_paths:
            try:
                relative = path.relative_to(system.start_path)
                return f"./{relative.as_posix()}"
            except ValueError:
                pass
        return path.as_posix()

    def _entry_path(self, entry: etree._Element, system: GameSystem) -> Optional[Path]:
        """
        Read an entry's <path> as an absolute path.

        Relative paths ("./Game.nes") are taken relative to the system folder.
        """
        path_elem = entry.find("path")
        if path_elem is None or not path_elem.text or not path_elem.text.strip():
            return None

        path = Path(path_elem.text.strip())
        if not path.is_absolute():
            path = system.start_path / path
        return path

    def _load_document(self, xml_path: Path) -> etree._ElementTree:
        """
        Parse gamelist.xml.

        Raises:
            DocumentParseError: If the XML is malformed or has no <gameList> root
        """
        parser = etree.XMLParser(remove_blank_text=True)
        try:
            document = etree.parse(str(xml_path), parser)
        except (etree.XMLSyntaxError, OSError) as e:
            raise DocumentParseError(f'Error parsing XML file "{xml_path}"!\n\t{e}') from e

        if document.getroot().tag != ROOT_TAG:
            raise DocumentParseError(
                f'Could not find <{ROOT_TAG}> node in gamelist "{xml_path}"!'
            )
        return document

    def _save_document(self, document: etree._ElementTree, xml_path: Path) -> None:
        """
        Write gamelist.xml, backing up the previous version if configured.

        Raises:
            DocumentSaveError: If the backup or the write fails
        """
        if self.settings.backup and self.filesystem.exists(xml_path):
            try:
                GamelistBackup.create_backup(xml_path)
                GamelistBackup.cleanup_old_backups(xml_path.parent, self.settings.backup_keep)
            except OSError as e:
                raise DocumentSaveError(
                    f'Could not back up "{xml_path}", not overwriting it: {e}'
                ) from e

        try:
            document.write(
                str(xml_path),
                encoding='utf-8',
                xml_declaration=True,
                pretty_print=True
            )
        except (OSError, etree.SerialisationError) as e:
            raise DocumentSaveError(f'Error saving gamelist.xml file "{xml_path}"! {e}') from e
