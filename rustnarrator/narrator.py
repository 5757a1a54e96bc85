"""
Narrator Pipeline

Reads a Rust file, parses it, lowers the tree and writes the narration to
a sink. The whole file is parsed and described before the first line is
emitted, so a failing file produces no partial output.
"""

from typing import Optional

from rustnarrator.ast.description import describe_file
from rustnarrator.ast.lowering import lower_tree
from rustnarrator.ast.models import SourceFile
from rustnarrator.ast.parser import get_parser
from rustnarrator.ast.sink import NarrationSink
from rustnarrator.configs.constants import DEFAULT_ENCODING, MAX_FILE_SIZE
from rustnarrator.configs.logging import get_logger

logger = get_logger("narrator")


def parse_source(source: str, path: Optional[str] = None) -> SourceFile:
    """
    Parse Rust source text into model nodes.

    Raises:
        ParseError: If the source is not valid Rust
    """
    tree = get_parser().parse(source)
    return lower_tree(tree, source, path=path)


def load_source_file(file_path: str, config: Optional[dict] = None) -> SourceFile:
    """
    Read and parse a Rust file into model nodes.

    Args:
        file_path: Path to the .rs file
        config: Merged configuration (see get_full_config); defaults apply
                for missing keys

    Raises:
        SourceError: If the file can't be read
        ParseError: If the file is not valid Rust
    """
    config = config or {}
    source = get_parser().read_source(
        file_path,
        encoding=config.get("encoding", DEFAULT_ENCODING),
        max_file_size=config.get("max_file_size", MAX_FILE_SIZE),
    )
    return parse_source(source, path=file_path)


def narrate_source(source: str, sink: NarrationSink, path: Optional[str] = None) -> int:
    """
    Narrate Rust source text into a sink.

    Returns:
        Number of lines emitted
    """
    lines = describe_file(parse_source(source, path=path))
    return sink.emit_all(lines)


def narrate_file(file_path: str, sink: NarrationSink, config: Optional[dict] = None) -> int:
    """
    Narrate a Rust file into a sink.

    Returns:
        Number of lines emitted
    """
    source_file = load_source_file(file_path, config)
    lines = describe_file(source_file)
    logger.debug(
        f"Narrating {file_path}: {len(source_file.items)} items, {len(lines)} lines"
    )
    return sink.emit_all(lines)
