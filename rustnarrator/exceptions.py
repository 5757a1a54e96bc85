"""
rustnarrator Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All rustnarrator-specific exceptions inherit from NarratorError.

Usage:
    from rustnarrator.exceptions import NarratorError, ParseError, SourceError

    try:
        source_file = load_source_file(path)
    except ParseError as e:
        logger.error(f"Parse failed: {e}")
"""


class NarratorError(Exception):
    """Base exception for all rustnarrator errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NarratorError):
    """Error in rustnarrator configuration."""

    pass


# =============================================================================
# Source Errors
# =============================================================================


class SourceError(NarratorError):
    """Base class for errors reading the input file."""

    pass


class SourceFileNotFoundError(SourceError):
    """Input file does not exist or is not a regular file."""

    pass


class SourceReadError(SourceError):
    """Input file exists but could not be read as text."""

    pass


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(NarratorError):
    """Source text is not syntactically valid Rust."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        base = super().__str__()
        if self.line is not None:
            return f"{base} at line {self.line}, column {self.column}"
        return base
