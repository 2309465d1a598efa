"""Gamelist behavior settings derived from configuration."""

from dataclasses import dataclass
from typing import Any, Dict

from .loader import get_config_value


@dataclass
class GamelistSettings:
    """
    Explicit settings handed to the gamelist synchronizer.

    disable_gamelist_writes and ignore_gamelist mirror EmulationStation's
    DisableGamelistWrites and IGNOREGAMELIST options.
    """
    disable_gamelist_writes: bool = False
    ignore_gamelist: bool = False
    relative_paths: bool = False
    backup: bool = False
    backup_keep: int = 5

    @property
    def writes_suppressed(self) -> bool:
        return self.disable_gamelist_writes or self.ignore_gamelist

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'GamelistSettings':
        """
        Build settings from the gamelist section of a config dict.

        Args:
            config: Configuration dictionary from load_config

        Returns:
            GamelistSettings with defaults for anything unset
        """
        return cls(
            disable_gamelist_writes=bool(get_config_value(config, 'gamelist.disable_writes', False)),
            ignore_gamelist=bool(get_config_value(config, 'gamelist.ignore_gamelist', False)),
            relative_paths=bool(get_config_value(config, 'gamelist.relative_paths', False)),
            backup=bool(get_config_value(config, 'gamelist.backup', False)),
            backup_keep=int(get_config_value(config, 'gamelist.backup_keep', 5)),
        )
