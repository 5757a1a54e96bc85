"""
Tree-sitter Parser Wrapper

Reads Rust source files and parses them with the tree-sitter Rust grammar.
Syntax errors are fatal: a tree containing ERROR or MISSING nodes is
rejected with a ParseError instead of being narrated partially.
"""

from pathlib import Path
from typing import Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from rustnarrator.configs.constants import DEFAULT_ENCODING, MAX_FILE_SIZE, RUST_EXTENSIONS
from rustnarrator.configs.logging import get_logger
from rustnarrator.exceptions import (
    ParseError,
    SourceFileNotFoundError,
    SourceReadError,
)

logger = get_logger("ast.parser")


class ASTParser:
    """
    Tree-sitter based parser for Rust.

    Lazily initializes the language and parser on first use.
    """

    def __init__(self):
        self._parser: Optional[Parser] = None
        self._language: Optional[Language] = None

    @property
    def language(self) -> Language:
        """Get or create the Rust Language object."""
        if self._language is None:
            self._language = Language(tree_sitter_rust.language())
        return self._language

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(self.language)
        return self._parser

    def is_rust_file(self, file_path: str) -> bool:
        """Check if a path carries a Rust source extension."""
        return Path(file_path).suffix.lower() in RUST_EXTENSIONS

    def parse(self, source: str) -> Tree:
        """
        Parse Rust source code into a syntax tree.

        Args:
            source: Source code as string

        Returns:
            Tree-sitter Tree without syntax errors

        Raises:
            ParseError: If the source is not valid Rust
        """
        tree = self._get_parser().parse(source.encode("utf-8"))
        root = tree.root_node
        if root.has_error:
            bad = find_error_node(root)
            if bad is not None:
                line, column = bad.start_point[0] + 1, bad.start_point[1] + 1
                what = f"missing {bad.type}" if bad.is_missing else "unexpected syntax"
            else:
                line, column, what = None, None, "unexpected syntax"
            raise ParseError(f"unable to parse file: {what}", line=line, column=column)
        return tree

    def read_source(
        self,
        file_path: str,
        encoding: str = DEFAULT_ENCODING,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> str:
        """
        Read a whole source file as text.

        Args:
            file_path: Path to the source file
            encoding: Text encoding of the file
            max_file_size: Refuse files larger than this many bytes

        Returns:
            File contents

        Raises:
            SourceFileNotFoundError: If the path is not an existing file
            SourceReadError: If the file is too large or can't be decoded
        """
        path = Path(file_path)
        if not path.is_file():
            raise SourceFileNotFoundError("No such file", {"path": file_path})

        if not self.is_rust_file(file_path):
            logger.warning(f"{file_path} does not have a .rs extension, parsing anyway")

        try:
            size = path.stat().st_size
            if size > max_file_size:
                raise SourceReadError(
                    "File too large",
                    {"path": file_path, "size": size, "limit": max_file_size},
                )
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError as e:
            raise SourceReadError(
                f"File is not valid {encoding} text", {"path": file_path}
            ) from e
        except OSError as e:
            raise SourceReadError(
                "Failed to read file", {"path": file_path, "error": e.strerror or str(e)}
            ) from e

    def parse_file(
        self,
        file_path: str,
        encoding: str = DEFAULT_ENCODING,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> tuple[Tree, str]:
        """
        Read and parse a file.

        Returns:
            Tuple of (Tree, source text)
        """
        source = self.read_source(file_path, encoding=encoding, max_file_size=max_file_size)
        logger.debug(f"Parsing {file_path} ({len(source)} chars)")
        return self.parse(source), source


def find_error_node(node: Node) -> Optional[Node]:
    """Return the first ERROR or MISSING node in pre-order, if any."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = find_error_node(child)
            if found is not None:
                return found
    return None


# Global parser instance (lazy singleton)
_parser: Optional[ASTParser] = None


def get_parser() -> ASTParser:
    """Get the global ASTParser instance."""
    global _parser
    if _parser is None:
        _parser = ASTParser()
    return _parser
