"""
rustnarrator CLI

Usage:
    rust-narrate FILE

Prints one descriptive line per visited AST node of a Rust source file.
"""

import argparse
import sys
from typing import Optional

from rustnarrator.ast.sink import StreamSink
from rustnarrator.configs.logging import get_logger, setup_logging
from rustnarrator.configs.runtime import get_full_config
from rustnarrator.exceptions import (
    ConfigurationError,
    NarratorError,
    ParseError,
    SourceError,
)
from rustnarrator.narrator import narrate_file
from rustnarrator.version import version_string

logger = get_logger("cli")

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_SOURCE_ERROR = 2
EXIT_PARSE_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rust-narrate",
        description="Visualize Rust's AST",
        epilog="Describes each function, statement, expression and pattern "
        "of a Rust source file in plain text.",
    )
    parser.add_argument(
        "file",
        metavar="FILE",
        help="Path to file",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {version_string()}",
    )
    return parser


def _fail(message: str, code: int) -> int:
    # One diagnostic line on stderr, whatever the error text contains
    print(f"rust-narrate: {' '.join(message.split())}", file=sys.stderr)
    return code


def _reason(error: NarratorError) -> str:
    cause = error.details.get("error", error.details.get("value"))
    return error.message if cause is None else f"{error.message}: {cause}"


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_full_config()
        setup_logging(debug=config["debug"], log_file=config["log_file"])
    except ConfigurationError as e:
        return _fail(f"invalid configuration: {_reason(e)}", EXIT_CONFIG_ERROR)

    try:
        narrate_file(args.file, StreamSink(), config)
    except SourceError as e:
        logger.debug(f"Read failed: {e}")
        return _fail(f"cannot read {args.file}: {_reason(e)}", EXIT_SOURCE_ERROR)
    except ParseError as e:
        return _fail(f"{args.file}: {e}", EXIT_PARSE_ERROR)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
