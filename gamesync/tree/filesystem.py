"""
Filesystem queries used during gamelist synchronization.

Wrapped in a class so tests and hosts can substitute their own behavior.
"""

import os
from pathlib import Path
from typing import Union

from gamesync.errors import PathResolutionError

PathLike = Union[str, Path]


class FileSystem:
    """Thin wrapper over pathlib/os filesystem calls."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def equivalent(self, path_a: PathLike, path_b: PathLike) -> bool:
        """
        Check whether two existing paths refer to the same file.

        Raises:
            OSError: If either path cannot be stat'ed
        """
        return os.path.samefile(path_a, path_b)

    def canonical(self, path: PathLike) -> Path:
        """
        Resolve a path to its absolute, symlink-free form.

        Args:
            path: Path to resolve

        Returns:
            Canonical absolute path

        Raises:
            PathResolutionError: If the path does not exist or cannot be resolved
        """
        try:
            return Path(path).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise PathResolutionError(f"Cannot resolve path {path}: {e}") from e

    def create_directories(self, path: PathLike) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
