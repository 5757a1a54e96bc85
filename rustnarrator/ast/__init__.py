"""
Rust AST Narration

Tree-sitter parsing of Rust source, lowering into closed model types, and
the recursive describers that narrate those models.
"""

from rustnarrator.ast.models import (
    Block,
    Expression,
    Item,
    Pattern,
    SourceFile,
    Statement,
)
from rustnarrator.ast.parser import ASTParser, get_parser
from rustnarrator.ast.lowering import RustLowering, lower_tree
from rustnarrator.ast.description import (
    Narration,
    describe_expression,
    describe_file,
    describe_item,
    describe_pattern,
    narrate_expression,
    walk_block,
)
from rustnarrator.ast.sink import ListSink, NarrationSink, StreamSink

__all__ = [
    # Models
    "SourceFile",
    "Item",
    "Statement",
    "Block",
    "Expression",
    "Pattern",
    # Parser
    "ASTParser",
    "get_parser",
    # Lowering
    "RustLowering",
    "lower_tree",
    # Description
    "Narration",
    "describe_file",
    "describe_item",
    "walk_block",
    "describe_expression",
    "narrate_expression",
    "describe_pattern",
    # Sinks
    "NarrationSink",
    "StreamSink",
    "ListSink",
]
