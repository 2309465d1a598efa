"""
Tree lookup for gamelist entries.

Finds the tree node matching an absolute path, creating missing game
nodes (and the folders leading up to them) on the way.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from gamesync.errors import ContainmentViolation, FolderCreationRefused
from gamesync.tree.file_node import FileNode, FileTree, FileType
from gamesync.tree.filesystem import FileSystem
from .path_relativizer import relativize

logger = logging.getLogger(__name__)


class TreeResolver:
    """
    Resolves absolute paths to nodes of a FileTree.

    Folders are never created on their own: a missing folder is only
    added when it leads up to a game being inserted.
    """

    def __init__(
        self,
        tree: FileTree,
        filesystem: Optional[FileSystem] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.

        Args:
            tree: Tree to search and extend
            filesystem: Filesystem collaborator for path canonicalization
            log: Logger to report skipped paths to (defaults to module logger)
        """
        self.tree = tree
        self.filesystem = filesystem or FileSystem()
        self.log = log or logger

    def resolve_or_create(
        self,
        path: Union[str, Path],
        kind: FileType
    ) -> Optional[FileNode]:
        """
        Find or create the node for path.

        Args:
            path: Absolute path of the game or folder
            kind: Requested node kind; only GAME nodes are ever created

        Returns:
            Matching or newly created node, or None if the path is outside
            the root or would need a folder that does not exist yet

        Raises:
            PathResolutionError: If path or the root path cannot be canonicalized
        """
        try:
            return self._walk(Path(path), kind)
        except ContainmentViolation as e:
            self.log.error(str(e))
            return None
        except FolderCreationRefused as e:
            self.log.warning(str(e))
            return None

    def _walk(self, path: Path, kind: FileType) -> FileNode:
        root = self.tree.root

        relative, contains = relativize(path, root.path, self.filesystem)
        if not contains:
            raise ContainmentViolation(
                f'File path "{path}" is outside system path "{root.path}"'
            )

        segments = relative.parts
        if not segments:
            if kind == FileType.FOLDER:
                return root
            raise FolderCreationRefused(
                f'gameList: "{path}" is the system root folder, not a game'
            )

        node = root
        for segment in segments[:-1]:
            match = self._find_child(node, segment)

            if match is None:
                # an empty folder chain is never worth creating
                if kind == FileType.FOLDER:
                    raise FolderCreationRefused(
                        f'gameList: folder "{node.path / segment}" doesn\'t already exist, won\'t create'
                    )

                match = self.tree.add_child(node, node.path / segment, FileType.FOLDER)

            node = match

        match = self._find_child(node, segments[-1])
        if match is not None:
            return match

        if kind == FileType.FOLDER:
            raise FolderCreationRefused(
                f'gameList: folder "{path}" doesn\'t already exist, won\'t create'
            )

        # node name must match its canonical segment
        return self.tree.add_child(node, node.path / segments[-1], FileType.GAME)

    def _find_child(self, node: FileNode, segment: str) -> Optional[FileNode]:
        for child in self.tree.children(node):
            if child.name == segment:
                return child
        return None
