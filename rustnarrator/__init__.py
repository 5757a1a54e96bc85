"""
rustnarrator

Narrates a Rust source file's syntax tree as plain descriptive text:
"Entering main function", "Calling method push on object: v", ...
"""

from rustnarrator.version import __version__

__all__ = ["__version__"]
