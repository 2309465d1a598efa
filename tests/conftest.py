"""
Shared pytest fixtures and utilities for the gamesync test suite.
"""

from pathlib import Path
from typing import Callable, List

import pytest
from lxml import etree

from gamesync.system import GameSystem
from gamesync.tree.file_node import FileTree


@pytest.fixture
def system_dir(tmp_path: Path) -> Path:
    """
    ROM folder for a NES-like system inside the temp workspace.
    """
    path = tmp_path / "roms" / "nes"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_rom(system_dir: Path) -> Callable[[str], Path]:
    """
    Create a fake ROM file below the system folder.

    Usage:
        rom = make_rom("foo/bar.nes")
    """

    def _builder(relative: str) -> Path:
        rom = system_dir / relative
        rom.parent.mkdir(parents=True, exist_ok=True)
        rom.write_bytes(b"FAKE_ROM_DATA")
        return rom

    return _builder


@pytest.fixture
def nes_system(tmp_path: Path, system_dir: Path) -> GameSystem:
    """
    GameSystem with an empty tree rooted at the system folder.
    """
    return GameSystem(
        name="nes",
        start_path=system_dir,
        gamelists_dir=tmp_path / "gamelists",
        fullname="Nintendo Entertainment System",
        tree=FileTree(system_dir),
    )


@pytest.fixture
def write_gamelist(nes_system: GameSystem) -> Callable[[str], Path]:
    """
    Write a gamelist.xml for nes_system from the inner XML of <gameList>.
    """

    def _builder(body: str) -> Path:
        path = nes_system.gamelists_dir / nes_system.name / "gamelist.xml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f'<?xml version="1.0"?>\n<gameList>\n{body}\n</gameList>\n')
        return path

    return _builder


@pytest.fixture
def read_entries(nes_system: GameSystem) -> Callable[[], List[etree._Element]]:
    """
    Parse nes_system's gamelist.xml and return its top-level entries.
    """

    def _reader() -> List[etree._Element]:
        root = etree.parse(str(nes_system.gamelists_dir / "nes" / "gamelist.xml")).getroot()
        assert root.tag == "gameList"
        return list(root)

    return _reader

