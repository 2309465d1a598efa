"""
Path containment checks for gamelist entries.

Example: relativize("/home/pi/roms/nes/foo/bar.nes", "/home/pi/roms/nes/")
returns (Path("foo/bar.nes"), True).
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from gamesync.tree.filesystem import FileSystem

_default_filesystem = FileSystem()


def relativize(
    path: Union[str, Path],
    root: Union[str, Path],
    filesystem: Optional[FileSystem] = None
) -> Tuple[Path, bool]:
    """
    Express path relative to root if it lies inside it.

    Both paths are canonicalized first, so symlinks and ".." segments
    are resolved before comparing. Segments are compared exactly.

    Args:
        path: Absolute path to check
        root: Absolute root folder
        filesystem: Filesystem collaborator (defaults to the real filesystem)

    Returns:
        Tuple of (relative path, contained). When contained is False the
        returned path is the canonical input path and should not be used.
        A path equal to root yields (Path("."), True), which has no parts.

    Raises:
        PathResolutionError: If either path cannot be canonicalized
    """
    fs = filesystem or _default_filesystem
    p = fs.canonical(path)
    r = fs.canonical(root)

    if p.anchor != r.anchor:
        return p, False

    path_parts = p.parts
    root_parts = r.parts

    # find point of divergence
    common = 0
    while (
        common < len(path_parts)
        and common < len(root_parts)
        and path_parts[common] == root_parts[common]
    ):
        common += 1

    if common != len(root_parts):
        return p, False

    remaining = [part for part in path_parts[common:] if part != "."]
    return Path(*remaining), True
