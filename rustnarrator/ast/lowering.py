"""
Tree-sitter to Model Lowering

Converts a tree-sitter-rust concrete syntax tree into the closed node types
of rustnarrator.ast.models. The narrator only ever sees those models.

Lowering never fails on valid syntax: node kinds without a dedicated
variant become OtherItem / OtherStatement / UnrecognizedExpression /
UnrecognizedPattern carrying the tree-sitter kind.
"""

from typing import Optional

from tree_sitter import Node, Tree

from rustnarrator.ast.models import (
    Assignment,
    BinaryOp,
    Block,
    BlockExpression,
    Expression,
    ExpressionStatement,
    FieldPattern,
    ForLoop,
    FunctionCall,
    FunctionItem,
    IdentifierPattern,
    Item,
    Literal,
    LiteralPattern,
    LocalBinding,
    MacroInvocation,
    Match,
    MatchArm,
    MethodCall,
    ModuleItem,
    NestedItem,
    OrPattern,
    OtherItem,
    OtherStatement,
    PathPattern,
    PathReference,
    Pattern,
    RangePattern,
    ReferencePattern,
    SourceFile,
    Statement,
    StructPattern,
    TuplePattern,
    UnrecognizedExpression,
    UnrecognizedPattern,
    WildcardPattern,
)
from rustnarrator.configs.logging import get_logger

logger = get_logger("ast.lowering")


COMMENT_KINDS = {"line_comment", "block_comment"}

# Literal node kinds and the name recorded on Literal.kind
LITERAL_KINDS = {
    "integer_literal": "integer",
    "float_literal": "float",
    "string_literal": "string",
    "raw_string_literal": "string",
    "char_literal": "char",
    "boolean_literal": "boolean",
}

# Single-segment path expressions
IDENTIFIER_KINDS = {"identifier", "self", "super", "crate", "metavariable"}

PATH_KINDS = {"scoped_identifier", "generic_function"}

# Declarations that may appear at module level or inside a block
ITEM_KINDS = {
    "const_item",
    "static_item",
    "mod_item",
    "foreign_mod_item",
    "struct_item",
    "union_item",
    "enum_item",
    "type_item",
    "function_item",
    "function_signature_item",
    "impl_item",
    "trait_item",
    "associated_type",
    "macro_definition",
    "use_declaration",
    "extern_crate_declaration",
}

# Statement-level nodes that are neither items nor expressions
SKIPPED_STATEMENT_KINDS = {
    "empty_statement",
    "attribute_item",
    "inner_attribute_item",
    "label",
}

GROUP_DELIMITERS = {"(": ")", "[": "]", "{": "}"}


class RustLowering:
    """
    Lowers tree-sitter-rust nodes into model nodes.

    One instance holds the source bytes of a single file; node text is
    sliced from those bytes so multi-byte characters stay intact.
    """

    def __init__(self, source: bytes):
        self.source = source

    # Helper methods for AST traversal

    def get_node_text(self, node: Node) -> str:
        """Extract the text content of an AST node."""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def get_flat_text(self, node: Node) -> str:
        """Node text with all whitespace runs collapsed to single spaces."""
        return " ".join(self.get_node_text(node).split())

    def find_child(self, node: Node, type_name: str) -> Optional[Node]:
        """Find the first direct child of a specific type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    def significant_children(self, node: Node) -> list[Node]:
        """Named children without comments."""
        return [c for c in node.named_children if c.type not in COMMENT_KINDS]

    def pattern_children(self, node: Node) -> list[Node]:
        """Children that are patterns, including the anonymous `_` token."""
        return [
            c
            for c in node.children
            if (c.is_named and c.type not in COMMENT_KINDS) or c.type == "_"
        ]

    # =========================================================================
    # Items
    # =========================================================================

    def lower_file(self, tree: Tree, path: Optional[str] = None) -> SourceFile:
        """Lower a whole source file."""
        items = [
            self.lower_item(child)
            for child in self.significant_children(tree.root_node)
        ]
        return SourceFile(items=tuple(items), path=path)

    def lower_item(self, node: Node) -> Item:
        if node.type == "mod_item":
            name = node.child_by_field_name("name")
            return ModuleItem(name=self.get_node_text(name))

        if node.type == "function_item":
            name = node.child_by_field_name("name")
            body = node.child_by_field_name("body")
            return FunctionItem(
                name=self.get_node_text(name),
                body=self.lower_block(body) if body is not None else Block(),
            )

        return OtherItem(kind=node.type)

    # =========================================================================
    # Blocks and statements
    # =========================================================================

    def lower_block(self, node: Node) -> Block:
        statements = [
            self.lower_statement(child) for child in self.significant_children(node)
        ]
        return Block(statements=tuple(statements))

    def lower_statement(self, node: Node) -> Statement:
        kind = node.type

        if kind == "let_declaration":
            pattern = node.child_by_field_name("pattern")
            value = node.child_by_field_name("value")
            return LocalBinding(
                pattern=self.lower_pattern(pattern),
                initializer=self.lower_expression(value) if value is not None else None,
            )

        if kind == "expression_statement":
            inner = self.significant_children(node)
            if not inner:
                return OtherStatement(kind=kind)
            return ExpressionStatement(expression=self.lower_expression(inner[0]))

        if kind in ITEM_KINDS:
            return NestedItem(item=self.lower_item(node))

        if kind in SKIPPED_STATEMENT_KINDS:
            return OtherStatement(kind=kind)

        # Trailing block expression, or a macro call in statement position
        return ExpressionStatement(expression=self.lower_expression(node))

    # =========================================================================
    # Expressions
    # =========================================================================

    def lower_expression(self, node: Node) -> Expression:
        kind = node.type

        if kind in IDENTIFIER_KINDS or kind in PATH_KINDS:
            return self.lower_path(node)

        if kind in LITERAL_KINDS or kind == "negative_literal":
            return self.lower_literal(node)

        if kind == "assignment_expression":
            return Assignment(
                left=self.lower_expression(node.child_by_field_name("left")),
                right=self.lower_expression(node.child_by_field_name("right")),
            )

        if kind in ("binary_expression", "compound_assignment_expr"):
            return BinaryOp(
                left=self.lower_expression(node.child_by_field_name("left")),
                operator=self.get_node_text(node.child_by_field_name("operator")),
                right=self.lower_expression(node.child_by_field_name("right")),
            )

        if kind == "call_expression":
            return self.lower_call(node)

        if kind == "match_expression":
            return self.lower_match(node)

        if kind == "block":
            return BlockExpression(block=self.lower_block(node))

        if kind == "macro_invocation":
            return self.lower_macro(node)

        if kind == "for_expression":
            return ForLoop(
                pattern=self.lower_pattern(node.child_by_field_name("pattern")),
                iterable=self.lower_expression(node.child_by_field_name("value")),
                body=self.lower_block(node.child_by_field_name("body")),
            )

        logger.debug(f"No expression variant for {kind}")
        return UnrecognizedExpression(kind=kind, text=self.get_flat_text(node))

    def lower_path(self, node: Node) -> PathReference:
        text = self.get_flat_text(node)
        return PathReference(segments=split_path(text), text=text)

    def lower_literal(self, node: Node) -> Literal:
        value = self.get_node_text(node)
        if node.type == "negative_literal":
            inner = self.significant_children(node)
            kind = LITERAL_KINDS.get(inner[0].type, "integer") if inner else "integer"
            value = "".join(value.split())
        else:
            kind = LITERAL_KINDS[node.type]
        if kind == "string" and value.startswith("b"):
            kind = "byte_string"
        elif kind == "char" and value.startswith("b"):
            kind = "byte"
        return Literal(kind=kind, value=value)

    def lower_call(self, node: Node) -> Expression:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        args = tuple(
            self.lower_expression(arg)
            for arg in self.significant_children(arguments)
            if arg.type != "attribute_item"
        ) if arguments is not None else ()

        # `a.b(..)` and `a.b::<T>(..)` are method calls
        target = function
        if target.type == "generic_function":
            target = target.child_by_field_name("function")
        if target is not None and target.type == "field_expression":
            return MethodCall(
                receiver=self.lower_expression(target.child_by_field_name("value")),
                method=self.get_node_text(target.child_by_field_name("field")),
                args=args,
            )

        return FunctionCall(callee=self.lower_expression(function), args=args)

    def lower_match(self, node: Node) -> Match:
        scrutinee = self.lower_expression(node.child_by_field_name("value"))
        body = node.child_by_field_name("body")
        arms = []
        if body is not None:
            for arm in body.named_children:
                if arm.type != "match_arm":
                    continue
                arms.append(MatchArm(
                    pattern=self.lower_match_pattern(arm.child_by_field_name("pattern")),
                    body=self.lower_expression(arm.child_by_field_name("value")),
                ))
        return Match(scrutinee=scrutinee, arms=tuple(arms))

    def lower_match_pattern(self, node: Node) -> Pattern:
        # match_pattern wraps the pattern and an optional `if` guard
        if node.type != "match_pattern":
            return self.lower_pattern(node)
        condition = node.child_by_field_name("condition")
        for child in self.pattern_children(node):
            if condition is not None and child == condition:
                continue
            return self.lower_pattern(child)
        return UnrecognizedPattern(kind=node.type, text=self.get_flat_text(node))

    def lower_macro(self, node: Node) -> MacroInvocation:
        path = node.child_by_field_name("macro")
        if path is not None and path.type == "scoped_identifier":
            path = path.child_by_field_name("name")
        name = self.get_node_text(path) if path is not None else ""

        token_tree = self.find_child(node, "token_tree")
        rendered = self.render_token_tree(token_tree, outer=True) if token_tree is not None else ""
        return MacroInvocation(name=name, tokens=tuple(rendered.split()))

    def render_token_tree(self, node: Node, outer: bool = False) -> str:
        """
        Render a token tree as a spaced token stream.

        Tokens are separated by single spaces. Nested groups keep their
        delimiters attached: `(a , b)`, `[1 , 2]`, `{ x }`. The outermost
        delimiters of the macro call itself are dropped.
        """
        children = list(node.children)
        open_delim = close_delim = ""
        if children and children[0].type in GROUP_DELIMITERS:
            open_delim = children.pop(0).type
            if children and children[-1].type == GROUP_DELIMITERS[open_delim]:
                close_delim = children.pop().type

        parts = []
        for child in children:
            if child.type in COMMENT_KINDS:
                continue
            if child.type == "token_tree":
                parts.append(self.render_token_tree(child))
            else:
                parts.append(self.get_node_text(child))
        inner = " ".join(parts)

        if outer:
            return inner
        if open_delim == "{" and inner:
            return f"{{ {inner} }}"
        return f"{open_delim}{inner}{close_delim}"

    # =========================================================================
    # Patterns
    # =========================================================================

    def lower_pattern(self, node: Node) -> Pattern:
        kind = node.type

        if kind == "_":
            return WildcardPattern()

        if kind in ("identifier", "self"):
            return IdentifierPattern(name=self.get_node_text(node))

        if kind in ("mut_pattern", "ref_pattern"):
            mutable = kind == "mut_pattern" or self.find_child(node, "mutable_specifier") is not None
            inner = self.pattern_children(node)
            inner = [c for c in inner if c.type != "mutable_specifier"]
            if inner and inner[0].type == "identifier":
                return IdentifierPattern(name=self.get_node_text(inner[0]), mutable=mutable)
            if inner:
                return self.lower_pattern(inner[0])
            return UnrecognizedPattern(kind=kind, text=self.get_flat_text(node))

        if kind == "captured_pattern":
            # `name @ subpattern` binds `name`
            binding = self.find_child(node, "identifier")
            if binding is not None:
                mutable = self.find_child(node, "mutable_specifier") is not None
                return IdentifierPattern(name=self.get_node_text(binding), mutable=mutable)
            return UnrecognizedPattern(kind=kind, text=self.get_flat_text(node))

        if kind == "tuple_pattern":
            return TuplePattern(elements=tuple(
                self.lower_pattern(c) for c in self.pattern_children(node)
            ))

        if kind == "struct_pattern":
            return self.lower_struct_pattern(node)

        if kind == "scoped_identifier":
            text = self.get_flat_text(node)
            return PathPattern(segments=split_path(text), text=text)

        if kind == "range_pattern":
            return self.lower_range_pattern(node)

        if kind == "reference_pattern":
            mutable = self.find_child(node, "mutable_specifier") is not None
            inner = [c for c in self.pattern_children(node) if c.type != "mutable_specifier"]
            if inner:
                return ReferencePattern(pattern=self.lower_pattern(inner[0]), mutable=mutable)
            return UnrecognizedPattern(kind=kind, text=self.get_flat_text(node))

        if kind == "or_pattern":
            return OrPattern(alternatives=tuple(self._flatten_or(node)))

        if kind in LITERAL_KINDS or kind == "negative_literal":
            return LiteralPattern(literal=self.lower_literal(node))

        logger.debug(f"No pattern variant for {kind}")
        return UnrecognizedPattern(kind=kind, text=self.get_flat_text(node))

    def _flatten_or(self, node: Node) -> list[Pattern]:
        alternatives = []
        for child in self.pattern_children(node):
            if child.type == "or_pattern":
                alternatives.extend(self._flatten_or(child))
            else:
                alternatives.append(self.lower_pattern(child))
        return alternatives

    def lower_struct_pattern(self, node: Node) -> StructPattern:
        type_node = node.child_by_field_name("type")
        if type_node is not None and type_node.type == "scoped_type_identifier":
            type_node = type_node.child_by_field_name("name")
        type_name = self.get_node_text(type_node) if type_node is not None else ""

        fields = []
        for child in node.named_children:
            if child.type != "field_pattern":
                continue
            name = child.child_by_field_name("name")
            for fallback in ("shorthand_field_identifier", "field_identifier"):
                if name is None:
                    name = self.find_child(child, fallback)
            if name is None:
                continue
            member = self.get_node_text(name)
            sub = child.child_by_field_name("pattern")
            if sub is not None:
                fields.append(FieldPattern(member=member, pattern=self.lower_pattern(sub)))
            else:
                # Shorthand `Point { x }` binds the field to its own name
                mutable = self.find_child(child, "mutable_specifier") is not None
                fields.append(FieldPattern(
                    member=member,
                    pattern=IdentifierPattern(name=member, mutable=mutable),
                    explicit=False,
                ))
        return StructPattern(type_name=type_name, fields=tuple(fields))

    def lower_range_pattern(self, node: Node) -> RangePattern:
        start = end = None
        seen_operator = False
        for child in node.children:
            if child.type in ("..", "..=", "..."):
                seen_operator = True
            elif child.is_named and child.type not in COMMENT_KINDS:
                if seen_operator:
                    end = self.lower_range_bound(child)
                else:
                    start = self.lower_range_bound(child)
        return RangePattern(start=start, end=end)

    def lower_range_bound(self, node: Node) -> Expression:
        # Bounds are literals or paths; `-1` is a negative_literal here
        return self.lower_expression(node)


def split_path(text: str) -> tuple[str, ...]:
    """
    Split a path on `::`, ignoring separators inside generic brackets.

    `std::mem::swap` -> ("std", "mem", "swap");
    `Vec::<Vec<u8>>::new` -> ("Vec", "<Vec<u8>>", "new").
    """
    segments = []
    depth = 0
    current = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "<":
            depth += 1
        elif ch == ">" and depth > 0:
            depth -= 1
        if depth == 0 and text.startswith("::", i):
            segments.append("".join(current).strip())
            current = []
            i += 2
            continue
        current.append(ch)
        i += 1
    segments.append("".join(current).strip())
    return tuple(segments)


def lower_tree(tree: Tree, source: str, path: Optional[str] = None) -> SourceFile:
    """Lower a parsed tree-sitter tree into a SourceFile."""
    return RustLowering(source.encode("utf-8")).lower_file(tree, path=path)
