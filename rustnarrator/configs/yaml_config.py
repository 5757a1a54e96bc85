"""
rustnarrator YAML Configuration

Loads the optional ~/.rustnarrator/config.yaml. Expected layout:

    debug: false
    log_file: ~/.rustnarrator/rustnarrator.log
    source:
      encoding: "utf-8"
      max_file_size: 1048576
"""

from pathlib import Path

import yaml

from rustnarrator.configs.logging import get_logger
from rustnarrator.configs.paths import get_data_path
from rustnarrator.exceptions import ConfigurationError

logger = get_logger("config")


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config() -> dict:
    """
    Load configuration from ~/.rustnarrator/config.yaml.

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: If the file exists but is not a YAML mapping
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        loaded = yaml.safe_load(config_path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            "Could not load config file", {"path": str(config_path), "error": str(e)}
        ) from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", {"path": str(config_path)}
        )
    logger.debug(f"Loaded config from {config_path}")
    return loaded
