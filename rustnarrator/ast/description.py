"""
AST Narration

Turns model nodes into descriptive sentences, one line per visited node.

Every describer returns its output instead of printing it. Expressions
return a Narration: the lines produced by blocks nested inside the
expression, followed by the expression's own (possibly multi-line) text.
When an expression is embedded in a parent sentence, its text is embedded
and its nested block lines are hoisted ahead of the parent's text, so a
for loop's body is narrated before the loop header.
"""

from dataclasses import dataclass
from typing import Optional

from rustnarrator.ast.models import (
    Assignment,
    BinaryOp,
    BlockExpression,
    Block,
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
    MethodCall,
    ModuleItem,
    NestedItem,
    OrPattern,
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
    WildcardPattern,
)
from rustnarrator.configs.logging import get_logger

logger = get_logger("ast.description")


@dataclass(frozen=True)
class Narration:
    """Output of describing one expression."""

    preamble: tuple[str, ...] = ()  # lines from nested blocks, in order
    text: str = ""

    def lines(self) -> list[str]:
        """All output lines in emission order. Empty text adds no line."""
        lines = list(self.preamble)
        if self.text:
            lines.extend(self.text.split("\n"))
        return lines


# =============================================================================
# Patterns
# =============================================================================


def describe_pattern(pattern: Pattern) -> str:
    """
    Describe a pattern from a binding, match arm or loop.

    Unrecognized patterns describe as an empty string.
    """
    if isinstance(pattern, WildcardPattern):
        return "_"

    if isinstance(pattern, IdentifierPattern):
        return pattern.name

    if isinstance(pattern, TuplePattern):
        return "({})".format(", ".join(describe_pattern(e) for e in pattern.elements))

    if isinstance(pattern, StructPattern):
        fields = ", ".join(_describe_field(f) for f in pattern.fields)
        return f"{pattern.type_name} {{ {fields} }}"

    if isinstance(pattern, PathPattern):
        if len(pattern.segments) == 1:
            return pattern.segments[0]
        logger.debug(f"Multi-segment path pattern {pattern.text}")
        return pattern.text

    if isinstance(pattern, RangePattern):
        return f"{_describe_bound(pattern.start)}..{_describe_bound(pattern.end)}"

    if isinstance(pattern, ReferencePattern):
        return f"&{describe_pattern(pattern.pattern)}"

    if isinstance(pattern, OrPattern):
        return " | ".join(describe_pattern(a) for a in pattern.alternatives)

    if isinstance(pattern, LiteralPattern):
        return pattern.literal.value

    return ""


def _describe_field(field: FieldPattern) -> str:
    if field.explicit:
        return f"{field.member}: {describe_pattern(field.pattern)}"
    return f"{field.member} @ {describe_pattern(field.pattern)}"


def _describe_bound(bound: Optional[Expression]) -> str:
    # Open-ended ranges render the missing side as empty
    if bound is None:
        logger.debug("Range pattern with a missing bound")
        return ""
    return narrate_expression(bound).text


# =============================================================================
# Expressions
# =============================================================================


def narrate_expression(expression: Expression) -> Narration:
    """
    Describe an expression.

    Total over every Expression variant: anything without a dedicated
    description falls back to "Other expression: ...".
    """
    if isinstance(expression, PathReference):
        identifier = expression.identifier
        if identifier is not None:
            return Narration(text=identifier)
        return Narration(text=f"Found a path: {expression.text}")

    if isinstance(expression, Assignment):
        left = narrate_expression(expression.left)
        right = narrate_expression(expression.right)
        return Narration(
            preamble=left.preamble + right.preamble,
            text=f"Assigning to variable: {left.text}\nThe value being assigned: {right.text}",
        )

    if isinstance(expression, MethodCall):
        receiver = narrate_expression(expression.receiver)
        header = f"Calling method {expression.method} on object: {receiver.text}"
        return _with_arguments(header, receiver.preamble, expression.args)

    if isinstance(expression, FunctionCall):
        callee = narrate_expression(expression.callee)
        return _with_arguments(f"Function call: {callee.text}", callee.preamble, expression.args)

    if isinstance(expression, BinaryOp):
        left = narrate_expression(expression.left)
        right = narrate_expression(expression.right)
        return Narration(
            preamble=left.preamble + right.preamble,
            text=f"Binary operation: {left.text} {expression.operator} {right.text}",
        )

    if isinstance(expression, Literal):
        return Narration(text=f"Literal: {expression.value}")

    if isinstance(expression, Match):
        return _narrate_match(expression)

    if isinstance(expression, BlockExpression):
        return Narration(preamble=tuple(walk_block(expression.block)))

    if isinstance(expression, MacroInvocation):
        tokens = rust_debug_list(expression.tokens)
        return Narration(text=f"Macro call to {expression.name} with tokens: {tokens}")

    if isinstance(expression, ForLoop):
        pattern = describe_pattern(expression.pattern)
        iterable = narrate_expression(expression.iterable)
        body = walk_block(expression.body)
        return Narration(
            preamble=iterable.preamble + tuple(body),
            text=f"For loop with pattern {pattern} in expression {iterable.text} with body",
        )

    if isinstance(expression, UnrecognizedExpression):
        return Narration(text=f"Other expression: {expression.kind}({expression.text})")

    return Narration(text=f"Other expression: {expression!r}")


def describe_expression(expression: Expression) -> list[str]:
    """Describe an expression as the ordered lines it emits."""
    return narrate_expression(expression).lines()


def _with_arguments(
    header: str, preamble: tuple[str, ...], args: tuple[Expression, ...]
) -> Narration:
    lines = [header]
    for arg in args:
        narration = narrate_expression(arg)
        preamble += narration.preamble
        lines.append(f"With argument: {narration.text}")
    return Narration(preamble=preamble, text="\n".join(lines))


def _narrate_match(expression: Match) -> Narration:
    scrutinee = narrate_expression(expression.scrutinee)
    preamble = scrutinee.preamble
    lines = [f"Match expression for: {scrutinee.text}"]
    for arm in expression.arms:
        body = narrate_expression(arm.body)
        preamble += body.preamble
        lines.append(f"Case {describe_pattern(arm.pattern)} => {body.text}")
    return Narration(preamble=preamble, text="\n".join(lines))


def rust_debug_str(value: str) -> str:
    """Quote a string the way Rust's `{:?}` formats a `String`."""
    escaped = []
    for ch in value:
        if ch == "\\":
            escaped.append("\\\\")
        elif ch == '"':
            escaped.append('\\"')
        elif ch == "\n":
            escaped.append("\\n")
        elif ch == "\r":
            escaped.append("\\r")
        elif ch == "\t":
            escaped.append("\\t")
        elif ch == "\0":
            escaped.append("\\0")
        elif not ch.isprintable():
            escaped.append(f"\\u{{{ord(ch):x}}}")
        else:
            escaped.append(ch)
    return '"' + "".join(escaped) + '"'


def rust_debug_list(values) -> str:
    """Format a sequence of strings like Rust's `{:?}` on `Vec<String>`."""
    return "[" + ", ".join(rust_debug_str(v) for v in values) + "]"


# =============================================================================
# Statements and blocks
# =============================================================================


def describe_local(binding: LocalBinding) -> Optional[str]:
    """Describe a `let`; destructuring bindings are not narrated."""
    if isinstance(binding.pattern, IdentifierPattern):
        return f"Declared a local variable: {binding.pattern.name}"
    return None


def describe_statement(statement: Statement) -> list[str]:
    if isinstance(statement, LocalBinding):
        line = describe_local(statement)
        return [line] if line is not None else []

    if isinstance(statement, ExpressionStatement):
        return describe_expression(statement.expression)

    if isinstance(statement, NestedItem):
        return describe_item(statement.item)

    return []


def walk_block(block: Block) -> list[str]:
    """Describe every statement of a block, in source order."""
    lines: list[str] = []
    for statement in block.statements:
        lines.extend(describe_statement(statement))
    return lines


# =============================================================================
# Items
# =============================================================================


def describe_item(item: Item) -> list[str]:
    """
    Describe a declaration.

    Modules are announced but not descended into. Functions are announced
    and their body walked. Every other item is skipped.
    """
    if isinstance(item, ModuleItem):
        return [f"Adding {item.name} as a module"]

    if isinstance(item, FunctionItem):
        return [f"Entering {item.name} function", *walk_block(item.body)]

    return []


def describe_file(source_file: SourceFile) -> list[str]:
    """Describe every top-level item of a file, in source order."""
    lines: list[str] = []
    for item in source_file.items:
        lines.extend(describe_item(item))
    return lines
