"""Configuration validation."""

from pathlib import Path
from typing import Dict, Any, List

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    errors.extend(_validate_paths(config.get('paths', {})))
    errors.extend(_validate_gamelist(config.get('gamelist', {})))
    errors.extend(_validate_logging(config.get('logging', {})))
    errors.extend(_validate_systems(config.get('systems', [])))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_paths(section: Dict[str, Any]) -> List[str]:
    """Validate paths section."""
    errors = []

    if not isinstance(section, dict):
        return ["paths must be a mapping"]

    for path_key in ['roms', 'gamelists', 'es_systems']:
        if not section.get(path_key):
            errors.append(f"paths.{path_key} is required")

    es_systems = section.get('es_systems')
    if es_systems:
        path = Path(es_systems).expanduser()
        if not path.exists():
            errors.append(f"paths.es_systems file not found: {path}")
        elif not path.is_file():
            errors.append(f"paths.es_systems must be a file: {path}")

    return errors


def _validate_gamelist(section: Dict[str, Any]) -> List[str]:
    """Validate gamelist behavior section."""
    errors = []

    if not isinstance(section, dict):
        return ["gamelist must be a mapping"]

    for flag in ['disable_writes', 'ignore_gamelist', 'relative_paths', 'backup']:
        if flag in section and not isinstance(section[flag], bool):
            errors.append(f"gamelist.{flag} must be a boolean")

    if 'backup_keep' in section:
        keep = section['backup_keep']
        # bool is an int subclass
        if not isinstance(keep, int) or isinstance(keep, bool) or keep < 1:
            errors.append("gamelist.backup_keep must be a positive integer")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging section."""
    errors = []

    if not isinstance(section, dict):
        return ["logging must be a mapping"]

    level = section.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"logging.level must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if 'console' in section and not isinstance(section['console'], bool):
        errors.append("logging.console must be a boolean")

    log_file = section.get('file')
    if log_file is not None and not isinstance(log_file, str):
        errors.append("logging.file must be a path string")

    return errors


def _validate_systems(systems: Any) -> List[str]:
    """Validate the system filter list."""
    if systems is None:
        return []
    if not isinstance(systems, list):
        return ["systems must be a list"]
    if any(not isinstance(s, str) for s in systems):
        return ["systems entries must be strings"]
    return []
