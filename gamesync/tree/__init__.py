"""
File tree package for gamesync.

In-memory model of a system's games and folders plus their metadata.
"""

from .file_node import FileType, FileNode, FileTree
from .metadata import (
    MetaDataDecl,
    MetaDataList,
    GAME_METADATA,
    FOLDER_METADATA,
    clean_file_name,
    schema_for,
)
from .filesystem import FileSystem

__all__ = [
    'FileType',
    'FileNode',
    'FileTree',
    'MetaDataDecl',
    'MetaDataList',
    'GAME_METADATA',
    'FOLDER_METADATA',
    'clean_file_name',
    'schema_for',
    'FileSystem',
]
