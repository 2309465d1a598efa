"""
Configuration loading.

Reads config.yaml, fills in the optional sections and normalizes the
``paths`` section so every location is an absolute path string.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional

# Sections the rest of gamesync reads without checking for them first
OPTIONAL_SECTIONS = {
    'gamelist': dict,
    'logging': dict,
    'systems': list,
}


class ConfigError(Exception):
    """Configuration-related errors."""
    pass


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and normalize the gamesync configuration.

    Relative entries under ``paths`` are taken relative to the directory
    holding the config file, and ``~`` is expanded.

    Args:
        config_path: Path to config.yaml. If None, ./config.yaml is used.

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If the file is missing, unreadable or not a YAML mapping
    """
    path = Path(config_path) if config_path is not None else Path.cwd() / "config.yaml"

    config = _read_yaml(path)

    for section, factory in OPTIONAL_SECTIONS.items():
        if config.get(section) is None:
            config[section] = factory()

    if isinstance(config.get('paths'), dict):
        config['paths'] = _normalize_paths(config['paths'], path.parent)

    return config


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(
            f"Configuration file not found: {path}\n"
            f"Copy config.yaml.example to config.yaml and adjust the paths section."
        )

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    return data


def _normalize_paths(section: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    """Expand ~ and anchor relative paths at base_dir; non-strings are left for validation."""
    normalized = {}
    for key, value in section.items():
        if isinstance(value, str) and value:
            resolved = Path(value).expanduser()
            if not resolved.is_absolute():
                resolved = base_dir / resolved
            value = str(resolved)
        normalized[key] = value
    return normalized


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., 'gamelist.backup_keep')
        default: Default value if path not found

    Returns:
        Configuration value or default
    """
    value = config
    for key in path.split('.'):
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return value
