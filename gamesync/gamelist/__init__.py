"""
Gamelist synchronization package for gamesync.

Handles path containment, tree resolution and merging of ES gamelist.xml files.
"""

from .path_relativizer import relativize
from .resolver import TreeResolver
from .synchronizer import GamelistSynchronizer, SyncReport
from .backup import GamelistBackup

__all__ = [
    'relativize',
    'TreeResolver',
    'GamelistSynchronizer',
    'SyncReport',
    'GamelistBackup',
]
