"""Shared fixtures for config module tests."""
from pathlib import Path

import pytest


@pytest.fixture
def es_systems_file(tmp_path: Path) -> Path:
    """Write a small es_systems.xml into the temp workspace."""
    dest = tmp_path / "es_systems.xml"
    dest.write_text(
        """<?xml version="1.0"?>
<systemList>
  <system>
    <name>nes</name>
    <fullname>Nintendo Entertainment System</fullname>
    <path>%ROMPATH%/nes</path>
    <extension>.nes .zip</extension>
  </system>
  <system>
    <name>snes</name>
    <fullname>Super Nintendo</fullname>
    <path>%ROMPATH%\\snes</path>
  </system>
  <system>
    <name>broken</name>
  </system>
</systemList>
"""
    )
    return dest
