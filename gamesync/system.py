"""
Game system model.

A GameSystem ties a system's ROM folder to its gamelist.xml location and
the in-memory file tree built for it.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from gamesync.tree.file_node import FileTree

logger = logging.getLogger(__name__)

GAMELIST_FILENAME = "gamelist.xml"


class GameSystem:
    """A single emulated system (e.g. 'nes') and its file tree."""

    def __init__(
        self,
        name: str,
        start_path: Union[str, Path],
        gamelists_dir: Union[str, Path],
        fullname: Optional[str] = None,
        tree: Optional[FileTree] = None
    ):
        """
        Initialize system.

        Args:
            name: Short system name, also the gamelist subdirectory name
            start_path: ROM folder; root of the file tree
            gamelists_dir: Directory holding per-system gamelist folders
            fullname: Display name
            tree: Existing file tree (created on load if omitted)
        """
        self.name = name
        self.fullname = fullname or name
        self.start_path = Path(start_path)
        self.gamelists_dir = Path(gamelists_dir)
        self.tree = tree

    @property
    def gamelist_path(self) -> Path:
        """
        Location of this system's gamelist.xml.

        A gamelist.xml inside the ROM folder wins; otherwise the file lives
        under gamelists_dir/<name>/.
        """
        local = self.start_path / GAMELIST_FILENAME
        if local.exists():
            return local
        return self.gamelists_dir / self.name / GAMELIST_FILENAME

    def load(self, synchronizer) -> 'FileTree':
        """
        Create an empty tree and populate it from the gamelist.

        Args:
            synchronizer: GamelistSynchronizer used to parse the gamelist

        Returns:
            The populated tree
        """
        self.tree = FileTree(self.start_path)

        if synchronizer.settings.ignore_gamelist:
            logger.info(f"Ignoring gamelist for system {self.name}")
            return self.tree

        synchronizer.parse_gamelist(self)
        return self.tree

    def __repr__(self) -> str:
        return f"GameSystem(name={self.name!r}, start_path={str(self.start_path)!r})"
