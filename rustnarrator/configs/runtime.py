"""
rustnarrator Runtime Configuration

Configuration merging logic.
Combines defaults, YAML config, and environment variables.
"""

import codecs
import os

from rustnarrator.configs.constants import DEFAULT_ENCODING, MAX_FILE_SIZE
from rustnarrator.configs.yaml_config import load_yaml_config
from rustnarrator.exceptions import ConfigurationError

# --- Default Runtime Configuration ---

DEFAULT_CONFIG = {
    "debug": False,
    "log_file": None,
    "encoding": DEFAULT_ENCODING,
    "max_file_size": MAX_FILE_SIZE,
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("true", "1", "yes")


def _parse_size(value, source: str) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            "max_file_size must be an integer", {"source": source, "value": value}
        ) from e
    if size <= 0:
        raise ConfigurationError(
            "max_file_size must be positive", {"source": source, "value": size}
        )
    return size


def _check_encoding(value, source: str) -> str:
    try:
        codecs.lookup(str(value))
    except LookupError as e:
        raise ConfigurationError(
            "Unknown text encoding", {"source": source, "value": value}
        ) from e
    return str(value)


def get_full_config() -> dict:
    """
    Get full configuration merged from defaults, YAML, and environment.

    Priority (highest wins):
    1. Environment variables
    2. YAML config file
    3. DEFAULT_CONFIG

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigurationError: If any layer holds an invalid value
    """
    # Start with defaults
    config = dict(DEFAULT_CONFIG)

    # Merge YAML config
    yaml_config = load_yaml_config()

    if "debug" in yaml_config:
        config["debug"] = _parse_bool(yaml_config["debug"])
    if yaml_config.get("log_file"):
        config["log_file"] = str(yaml_config["log_file"])

    source_section = yaml_config.get("source") or {}
    if not isinstance(source_section, dict):
        raise ConfigurationError("'source' section must be a mapping")
    if "encoding" in source_section:
        config["encoding"] = _check_encoding(source_section["encoding"], "config.yaml")
    if "max_file_size" in source_section:
        config["max_file_size"] = _parse_size(source_section["max_file_size"], "config.yaml")

    # Environment overrides
    if os.environ.get("RUSTNARRATOR_DEBUG"):
        config["debug"] = _parse_bool(os.environ["RUSTNARRATOR_DEBUG"])

    if os.environ.get("RUSTNARRATOR_LOG_FILE"):
        config["log_file"] = os.environ["RUSTNARRATOR_LOG_FILE"]

    if os.environ.get("RUSTNARRATOR_ENCODING"):
        config["encoding"] = _check_encoding(
            os.environ["RUSTNARRATOR_ENCODING"], "RUSTNARRATOR_ENCODING"
        )

    if os.environ.get("RUSTNARRATOR_MAX_FILE_SIZE"):
        config["max_file_size"] = _parse_size(
            os.environ["RUSTNARRATOR_MAX_FILE_SIZE"], "RUSTNARRATOR_MAX_FILE_SIZE"
        )

    return config
