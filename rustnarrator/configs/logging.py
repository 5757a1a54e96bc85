"""
rustnarrator Logging Configuration

Diagnostics go to the `rustnarrator` logger tree, one child logger per
component (`rustnarrator.parser`, `rustnarrator.cli`, ...). Narration output
never goes through logging; the CLI writes it to stdout through a sink.

Environment:
- RUSTNARRATOR_DEBUG: Enable debug logging (default: false)
- RUSTNARRATOR_LOG_FILE: Also log to this file (default: none)
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from rustnarrator.exceptions import ConfigurationError

ROOT_LOGGER = "rustnarrator"

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("true", "1", "yes")


def _open_log_file(log_file: str) -> logging.FileHandler:
    """Open the log file, creating its directory.

    Raises:
        ConfigurationError: If the file or its directory cannot be created
    """
    log_path = Path(log_file).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot open log file {log_path}",
            {"error": e.strerror or str(e)},
        ) from e


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the rustnarrator logger tree.

    stderr only carries warnings and errors, except in debug mode without a
    log file, where debug output goes to stderr. Calling this again replaces
    the previous handlers.

    Args:
        debug: Enable debug level. Defaults to RUSTNARRATOR_DEBUG.
        log_file: Log file path. Defaults to RUSTNARRATOR_LOG_FILE.

    Returns:
        The root rustnarrator logger

    Raises:
        ConfigurationError: If the log file cannot be opened. Existing
            handlers are left untouched in that case.
    """
    if debug is None:
        debug = _env_flag("RUSTNARRATOR_DEBUG")
    if log_file is None:
        log_file = os.environ.get("RUSTNARRATOR_LOG_FILE") or None

    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []
    if log_file:
        file_handler = _open_log_file(log_file)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level if debug and not log_file else logging.WARNING)
    handlers.append(stderr_handler)

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    if log_file:
        logger.debug(f"Logging to file: {log_file}")
    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "parser", "narration", "cli")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
