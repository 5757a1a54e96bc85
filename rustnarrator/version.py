"""
Version Information

Single source for the package version and build metadata.
"""

import os

__version__ = "0.1.0"


def get_current_version() -> dict:
    """
    Get current version info.

    Returns:
        Dict with git_commit, build_time, version
    """
    return {
        "git_commit": os.environ.get("RUSTNARRATOR_GIT_COMMIT", "unknown"),
        "build_time": os.environ.get("RUSTNARRATOR_BUILD_TIME", "unknown"),
        "version": __version__,
    }


def version_string() -> str:
    """Human-readable version line for `--version`."""
    current = get_current_version()
    if current["git_commit"] != "unknown":
        return f"{current['version']} ({current['git_commit'][:7]})"
    return current["version"]
