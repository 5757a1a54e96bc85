"""
Data Models for the Rust AST

Closed, immutable node types consumed by the narrator. Each node family
(Item, Statement, Expression, Pattern) has a fixed set of variants plus an
explicit catch-all variant, so grammar the lowering does not understand
still produces a node instead of an error.
"""

from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Patterns
# =============================================================================


class Pattern:
    """Base class for pattern nodes."""


@dataclass(frozen=True)
class WildcardPattern(Pattern):
    """The `_` pattern."""


@dataclass(frozen=True)
class IdentifierPattern(Pattern):
    """A binding such as `x`, `mut x`, `ref x` or `x @ ..`.

    `mutable` records `mut`; narration only uses the name.
    """

    name: str
    mutable: bool = False


@dataclass(frozen=True)
class TuplePattern(Pattern):
    elements: tuple[Pattern, ...] = ()


@dataclass(frozen=True)
class FieldPattern:
    """One field of a struct pattern.

    `explicit` is True for `name: pattern`, False for the shorthand `name`.
    """

    member: str  # field name, or tuple index as text
    pattern: Pattern
    explicit: bool = True


@dataclass(frozen=True)
class StructPattern(Pattern):
    type_name: str
    fields: tuple[FieldPattern, ...] = ()


@dataclass(frozen=True)
class PathPattern(Pattern):
    """A path such as `Ordering::Less` in pattern position."""

    segments: tuple[str, ...]
    text: str


@dataclass(frozen=True)
class RangePattern(Pattern):
    # Either bound may be missing (`1..`, `..=5`)
    start: Optional["Expression"] = None
    end: Optional["Expression"] = None


@dataclass(frozen=True)
class ReferencePattern(Pattern):
    """`&pattern` or `&mut pattern`; narration ignores `mutable`."""

    pattern: Pattern
    mutable: bool = False


@dataclass(frozen=True)
class OrPattern(Pattern):
    alternatives: tuple[Pattern, ...] = ()


@dataclass(frozen=True)
class LiteralPattern(Pattern):
    literal: "Literal"


@dataclass(frozen=True)
class UnrecognizedPattern(Pattern):
    kind: str
    text: str = ""


# =============================================================================
# Expressions
# =============================================================================


class Expression:
    """Base class for expression nodes."""


@dataclass(frozen=True)
class PathReference(Expression):
    """A path expression: `x`, `self`, `std::mem::swap`, `Vec::<u8>::new`."""

    segments: tuple[str, ...]
    text: str

    @property
    def identifier(self) -> Optional[str]:
        """The bare identifier, or None for multi-segment or generic paths."""
        if len(self.segments) == 1 and self.text == self.segments[0]:
            return self.segments[0]
        return None


@dataclass(frozen=True)
class Assignment(Expression):
    left: Expression
    right: Expression


@dataclass(frozen=True)
class MethodCall(Expression):
    receiver: Expression
    method: str
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class FunctionCall(Expression):
    callee: Expression
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True)
class BinaryOp(Expression):
    left: Expression
    operator: str  # source symbol: "+", "==", "+=", ...
    right: Expression


@dataclass(frozen=True)
class Literal(Expression):
    """A literal token.

    `value` is the canonical source token (`1`, `2.5f32`, `"hi"`, `'c'`,
    `true`), which is also the literal's debug form. `kind` is kept for
    completeness; narration only uses `value`.
    """

    kind: str  # integer, float, string, char, boolean, byte_string, ...
    value: str


@dataclass(frozen=True)
class MatchArm:
    pattern: Pattern
    body: Expression


@dataclass(frozen=True)
class Match(Expression):
    scrutinee: Expression
    arms: tuple[MatchArm, ...] = ()


@dataclass(frozen=True)
class BlockExpression(Expression):
    block: "Block"


@dataclass(frozen=True)
class MacroInvocation(Expression):
    name: str
    tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class ForLoop(Expression):
    pattern: Pattern
    iterable: Expression
    body: "Block"


@dataclass(frozen=True)
class UnrecognizedExpression(Expression):
    """Any expression kind without a dedicated variant."""

    kind: str
    text: str = ""


# =============================================================================
# Statements and blocks
# =============================================================================


class Statement:
    """Base class for statement nodes."""


@dataclass(frozen=True)
class Block:
    """An ordered sequence of statements, in source order."""

    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class LocalBinding(Statement):
    """`let pattern = initializer;`"""

    pattern: Pattern
    initializer: Optional[Expression] = None


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression


@dataclass(frozen=True)
class NestedItem(Statement):
    item: "Item"


@dataclass(frozen=True)
class OtherStatement(Statement):
    kind: str


# =============================================================================
# Items
# =============================================================================


class Item:
    """Base class for item (declaration) nodes."""


@dataclass(frozen=True)
class ModuleItem(Item):
    name: str


@dataclass(frozen=True)
class FunctionItem(Item):
    name: str
    body: Block = field(default_factory=Block)


@dataclass(frozen=True)
class OtherItem(Item):
    kind: str


@dataclass(frozen=True)
class SourceFile:
    """Root of a parsed Rust file."""

    items: tuple[Item, ...] = ()
    path: Optional[str] = None
