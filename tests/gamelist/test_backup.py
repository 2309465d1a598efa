"""Tests for gamelist backup functionality"""
import pytest
from datetime import datetime

from gamesync.gamelist.backup import BACKUP_PREFIX, GamelistBackup


@pytest.mark.unit
def test_create_backup_creates_timestamped_copy(tmp_path):
    gamelist_path = tmp_path / "gamelist.xml"
    content = "<gameList><game><path>./a.nes</path><name>A</name></game></gameList>"
    gamelist_path.write_text(content)

    before = datetime.now()
    backup_path = GamelistBackup.create_backup(gamelist_path)
    after = datetime.now()

    assert backup_path.parent == gamelist_path.parent
    assert backup_path.name.startswith(BACKUP_PREFIX)
    assert backup_path.name.endswith(".bak")
    assert backup_path.read_text() == content

    stamp = backup_path.name[len(BACKUP_PREFIX):-len(".bak")]
    backup_time = datetime.strptime(stamp, "%Y%m%d_%H%M%S_%f")
    assert before <= backup_time <= after


@pytest.mark.unit
def test_create_backup_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        GamelistBackup.create_backup(tmp_path / "gamelist.xml")


@pytest.mark.unit
def test_list_backups_newest_first(tmp_path):
    names = [
        f"{BACKUP_PREFIX}20240101_000000_000000.bak",
        f"{BACKUP_PREFIX}20240301_000000_000000.bak",
        f"{BACKUP_PREFIX}20240201_000000_000000.bak",
    ]
    for name in names:
        (tmp_path / name).write_text("x")
    (tmp_path / "gamelist.xml").write_text("x")

    backups = GamelistBackup.list_backups(tmp_path)

    assert [b.name for b in backups] == sorted(names, reverse=True)


@pytest.mark.unit
def test_list_backups_missing_dir(tmp_path):
    assert GamelistBackup.list_backups(tmp_path / "nope") == []


@pytest.mark.unit
def test_cleanup_old_backups_keeps_most_recent(tmp_path):
    for month in range(1, 8):
        (tmp_path / f"{BACKUP_PREFIX}2024{month:02d}01_000000_000000.bak").write_text("x")

    deleted = GamelistBackup.cleanup_old_backups(tmp_path, keep_count=3)

    assert deleted == 4
    remaining = [b.name for b in GamelistBackup.list_backups(tmp_path)]
    assert remaining == [
        f"{BACKUP_PREFIX}20240701_000000_000000.bak",
        f"{BACKUP_PREFIX}20240601_000000_000000.bak",
        f"{BACKUP_PREFIX}20240501_000000_000000.bak",
    ]


@pytest.mark.unit
def test_cleanup_nothing_to_delete(tmp_path):
    (tmp_path / f"{BACKUP_PREFIX}20240101_000000_000000.bak").write_text("x")

    assert GamelistBackup.cleanup_old_backups(tmp_path, keep_count=5) == 0
