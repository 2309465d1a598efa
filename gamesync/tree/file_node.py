"""
File tree data structures.

The tree is stored as an arena: nodes live in a flat list owned by
FileTree and reference each other by integer id.
"""

from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .metadata import MetaDataList, clean_file_name, schema_for


class FileType(IntFlag):
    """Kind of a tree node. Combine with | when enumerating."""
    GAME = 1
    FOLDER = 2


@dataclass
class FileNode:
    """A game or folder in the file tree."""
    node_id: int
    path: Path
    kind: FileType
    metadata: MetaDataList
    parent_id: Optional[int] = None
    child_ids: List[int] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Filename component of the node path."""
        return self.path.name

    @property
    def tag(self) -> str:
        """Gamelist element tag for this node."""
        return "folder" if self.kind == FileType.FOLDER else "game"


class FileTree:
    """
    Arena-backed tree of FileNode records for one system.

    The root node is always a FOLDER at the system start path.
    """

    def __init__(self, root_path: Union[str, Path]):
        self._nodes: List[FileNode] = []
        self.root_id = self._new_node(Path(root_path), FileType.FOLDER, None).node_id

    def _new_node(self, path: Path, kind: FileType, parent_id: Optional[int]) -> FileNode:
        node = FileNode(
            node_id=len(self._nodes),
            path=path,
            kind=kind,
            metadata=MetaDataList.with_name(schema_for(kind), clean_file_name(path)),
            parent_id=parent_id,
        )
        self._nodes.append(node)
        return node

    @property
    def root(self) -> FileNode:
        return self._nodes[self.root_id]

    def node(self, node_id: int) -> FileNode:
        return self._nodes[node_id]

    def parent(self, node: FileNode) -> Optional[FileNode]:
        if node.parent_id is None:
            return None
        return self._nodes[node.parent_id]

    def children(self, node: FileNode) -> List[FileNode]:
        """Return a node's children in sibling order."""
        return [self._nodes[child_id] for child_id in node.child_ids]

    def add_child(
        self,
        parent: FileNode,
        path: Union[str, Path],
        kind: FileType
    ) -> FileNode:
        """
        Create a node and attach it as the last child of parent.

        Args:
            parent: Folder node to attach to
            path: Path of the new node
            kind: GAME or FOLDER

        Returns:
            The new node

        Raises:
            ValueError: If parent is not a folder
        """
        if parent.kind != FileType.FOLDER:
            raise ValueError(f"Cannot add children to a game node: {parent.path}")

        child = self._new_node(Path(path), kind, parent.node_id)
        parent.child_ids.append(child.node_id)
        return child

    def files_recursive(
        self,
        kinds: FileType = FileType.GAME | FileType.FOLDER,
        start: Optional[FileNode] = None
    ) -> List[FileNode]:
        """
        Collect descendants depth-first in sibling order.

        Args:
            kinds: Node kinds to include
            start: Node to start below (defaults to the root, which is excluded)

        Returns:
            Matching nodes
        """
        start = start if start is not None else self.root
        return [node for node in self._walk(start) if node.kind & kinds]

    def _walk(self, node: FileNode) -> Iterator[FileNode]:
        for child in self.children(node):
            yield child
            if child.child_ids:
                yield from self._walk(child)

    def __len__(self) -> int:
        return len(self._nodes)
