"""
Gamelist backup utilities

Keeps timestamped copies of gamelist.xml next to the original before the
synchronizer overwrites it.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "gamelist_gamesync_backup_"


class GamelistBackup:
    """Handles backup operations for gamelist.xml files"""

    @staticmethod
    def create_backup(gamelist_path: Path) -> Path:
        """
        Copy gamelist.xml to a timestamped backup in the same directory

        Args:
            gamelist_path: Path to the gamelist.xml file to back up

        Returns:
            Path to the backup file

        Raises:
            FileNotFoundError: If gamelist_path doesn't exist
            OSError: If the copy fails
        """
        if not gamelist_path.is_file():
            raise FileNotFoundError(f"Gamelist not found: {gamelist_path}")

        # YYYYMMDD_HHMMSS_microseconds
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = gamelist_path.parent / f"{BACKUP_PREFIX}{timestamp}.bak"

        try:
            shutil.copy2(gamelist_path, backup_path)
        except OSError as e:
            logger.error(f"Failed to create backup: {e}")
            raise

        logger.info(f"Backup created: {backup_path}")
        return backup_path

    @staticmethod
    def list_backups(gamelist_dir: Path) -> List[Path]:
        """
        List backup files in a directory, newest first

        Args:
            gamelist_dir: Directory to search for backups

        Returns:
            Backup file paths sorted by name (timestamp), newest first
        """
        if not gamelist_dir.is_dir():
            return []

        backups = list(gamelist_dir.glob(f"{BACKUP_PREFIX}*.bak"))
        backups.sort(key=lambda p: p.name, reverse=True)
        return backups

    @staticmethod
    def cleanup_old_backups(gamelist_dir: Path, keep_count: int = 5) -> int:
        """
        Remove old backup files, keeping only the most recent ones

        Args:
            gamelist_dir: Directory containing backup files
            keep_count: Number of recent backups to keep

        Returns:
            Number of backups deleted
        """
        backups = GamelistBackup.list_backups(gamelist_dir)

        deleted = 0
        for backup in backups[max(keep_count, 0):]:
            try:
                logger.debug(f"Removing old backup: {backup.name}")
                backup.unlink()
                deleted += 1
            except OSError as e:
                logger.warning(f"Failed to delete old backup {backup.name}: {e}")

        if deleted:
            logger.info(f"Cleaned up {deleted} old backup(s), kept {keep_count} most recent")

        return deleted

