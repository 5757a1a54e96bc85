"""
rustnarrator Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from rustnarrator.configs.logging import get_logger, setup_logging

# Paths
from rustnarrator.configs.paths import get_data_path

# Constants
from rustnarrator.configs.constants import (
    DEFAULT_ENCODING,
    MAX_FILE_SIZE,
    RUST_EXTENSIONS,
)

# YAML config
from rustnarrator.configs.yaml_config import (
    get_config_path,
    load_yaml_config,
)

# Runtime
from rustnarrator.configs.runtime import DEFAULT_CONFIG, get_full_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    # Constants
    "DEFAULT_ENCODING",
    "MAX_FILE_SIZE",
    "RUST_EXTENSIONS",
    # YAML config
    "get_config_path",
    "load_yaml_config",
    # Runtime
    "DEFAULT_CONFIG",
    "get_full_config",
]
