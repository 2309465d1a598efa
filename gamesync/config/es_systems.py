"""ES system configuration parsing."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from lxml import etree

from gamesync.system import GameSystem

logger = logging.getLogger(__name__)

_ROMPATH = re.compile(r'%ROMPATH%[/\\]?', re.IGNORECASE)


@dataclass
class SystemDefinition:
    """Represents a system defined in es_systems.xml."""
    name: str
    fullname: str
    path: str

    def resolve_rom_path(self, rom_root: Path) -> Path:
        """
        Resolve ROM path by replacing the %ROMPATH% placeholder.

        Examples:
            - "%ROMPATH%/nes" with rom_root="/roms" -> "/roms/nes"
            - "/absolute/path" -> "/absolute/path" (unchanged)
            - "~/my/roms/nes" -> "/home/user/my/roms/nes" (expanded)
        """
        path_str = _ROMPATH.sub(lambda _: str(rom_root) + '/', self.path)
        return Path(path_str).expanduser()

    def to_game_system(
        self,
        rom_root: Union[str, Path],
        gamelists_dir: Union[str, Path]
    ) -> GameSystem:
        """Create a GameSystem rooted at this system's ROM folder."""
        return GameSystem(
            name=self.name,
            start_path=self.resolve_rom_path(Path(rom_root).expanduser()),
            gamelists_dir=Path(gamelists_dir).expanduser(),
            fullname=self.fullname,
        )


class ESSystemsError(Exception):
    """ES systems parsing errors."""
    pass


def parse_es_systems(xml_path: Path) -> List[SystemDefinition]:
    """
    Parse es_systems.xml file.

    Args:
        xml_path: Path to es_systems.xml file

    Returns:
        List of SystemDefinition objects

    Raises:
        ESSystemsError: If XML cannot be parsed or is invalid
    """
    try:
        root = etree.parse(str(xml_path)).getroot()
    except etree.XMLSyntaxError as e:
        raise ESSystemsError(f"Invalid XML in es_systems.xml: {e}")
    except OSError as e:
        raise ESSystemsError(f"Failed to read es_systems.xml: {e}")

    if root.tag != 'systemList':
        raise ESSystemsError(
            f"Invalid root element: expected 'systemList', got '{root.tag}'"
        )

    systems = []
    for system_elem in root.findall('system'):
        name = _get_element_text(system_elem, 'name')
        path = _get_element_text(system_elem, 'path')
        if not name or not path:
            logger.warning(f"Skipping system without name or path (name: {name})")
            continue

        fullname = _get_element_text(system_elem, 'fullname') or name
        systems.append(SystemDefinition(name=name, fullname=fullname, path=path))

    if not systems:
        raise ESSystemsError("No valid systems found in es_systems.xml")

    return systems


def _get_element_text(parent: etree._Element, tag: str) -> Optional[str]:
    """Get stripped text content of child element."""
    elem = parent.find(tag)
    if elem is not None and elem.text and elem.text.strip():
        return elem.text.strip()
    return None


def get_systems_by_name(
    systems: List[SystemDefinition],
    names: Optional[List[str]] = None
) -> List[SystemDefinition]:
    """
    Filter systems by name (case-insensitive).

    Args:
        systems: List of all system definitions
        names: List of system names to include, or None for all

    Returns:
        Filtered list of systems

    Raises:
        ValueError: If a requested system name is not found
    """
    if not names:
        return systems

    name_set = set(n.lower() for n in names)
    filtered = [s for s in systems if s.name.lower() in name_set]

    missing = name_set - set(s.name.lower() for s in filtered)
    if missing:
        raise ValueError(
            f"Systems not found in es_systems.xml: {', '.join(sorted(missing))}"
        )

    return filtered
