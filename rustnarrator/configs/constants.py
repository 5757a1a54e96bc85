"""
rustnarrator Constants

Static values that rarely change: source file limits and extensions.
"""

# --- Source Files ---

# Extensions accepted without a warning
RUST_EXTENSIONS = {".rs"}

# Files larger than this are refused before parsing (1 MiB)
MAX_FILE_SIZE = 1024 * 1024

DEFAULT_ENCODING = "utf-8"
