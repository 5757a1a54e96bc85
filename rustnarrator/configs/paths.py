"""
rustnarrator Data Paths

Locates the per-user data directory that holds config.yaml.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".rustnarrator"

def get_data_path() -> Path:
    """Get the rustnarrator data directory path.

    RUSTNARRATOR_DATA_PATH overrides the default of ~/.rustnarrator.

    Returns:
        Path to the data directory
    """
    data_path = os.environ.get("RUSTNARRATOR_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH
