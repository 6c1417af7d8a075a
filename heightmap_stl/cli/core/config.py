#!/usr/bin/env python3
"""
Configuration management for the heightmap_stl command line.

Settings live in a JSON file (``~/.heightmap_stl.json`` unless
``HEIGHTMAP_STL_CONFIG`` or ``--config`` points elsewhere). Missing keys fall
back to ``DEFAULT_CONFIG`` and command-line flags override both.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from heightmap_stl.model.config import ExportConfig, MeshConfig, ReaderConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HEIGHTMAP_STL_CONFIG"

# Default settings
DEFAULT_CONFIG: Dict[str, Any] = {
    "reader": ReaderConfig().as_dict(),
    "mesh": MeshConfig().as_dict(),
    "export": ExportConfig().as_dict(),
}


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".heightmap_stl.json"


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings, merged over the defaults.

    An explicitly given file that cannot be read or parsed is an error; a
    broken default file only logs a warning.

    Args:
        config_path: Settings file, or None for the default location

    Returns:
        Dictionary with "reader", "mesh" and "export" sections.

    Raises:
        ValueError: If an explicit settings file is unreadable or invalid
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else get_config_path()

    config = {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
    if not path.exists():
        if explicit:
            raise ValueError(f"Config file not found: {path}")
        return config

    try:
        with open(path, 'r') as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError("top level must be an object")
    except (OSError, ValueError) as e:
        if explicit:
            raise ValueError(f"Could not load config file {path}: {e}") from e
        logger.warning(f"Could not load config file {path}: {e}")
        return config

    for section, values in loaded.items():
        if section in config and isinstance(values, dict):
            config[section].update(values)
        else:
            logger.warning(f"Ignoring unknown config section '{section}'")
    return config


def save_config(config: Dict[str, Any], config_path: Optional[Union[str, Path]] = None) -> None:
    """
    Save settings to the config file.

    Args:
        config: Settings dictionary to save.
        config_path: Destination, or None for the default location
    """
    path = Path(config_path) if config_path is not None else get_config_path()
    with open(path, 'w') as f:
        json.dump(config, f, indent=2)


def build_configs(
    settings: Dict[str, Any],
    overrides: Optional[Dict[str, Dict[str, Any]]] = None
) -> Tuple[ReaderConfig, MeshConfig, ExportConfig]:
    """
    Turn settings sections into validated configuration objects.

    Args:
        settings: Output of ``load_config``
        overrides: Per-section values from command-line flags; None values
            are skipped so unset flags keep the file settings

    Raises:
        ValueError: If a resulting configuration is invalid
    """
    overrides = overrides or {}
    sections = {}
    for section in ("reader", "mesh", "export"):
        values = dict(settings.get(section, {}))
        values.update({k: v for k, v in overrides.get(section, {}).items() if v is not None})
        sections[section] = values

    try:
        return (
            ReaderConfig.from_dict(sections["reader"]),
            MeshConfig.from_dict(sections["mesh"]),
            ExportConfig.from_dict(sections["export"]),
        )
    except TypeError as e:
        # Wrongly typed values from the JSON file fail inside validate()
        raise ValueError(f"Invalid setting type: {e}") from e
