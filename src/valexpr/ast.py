"""AST node types for parsed value expressions.

Every node is an immutable dataclass tagged with a class-level ``kind``.
Spans are informational and never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from valexpr.tokens import Span


class NodeKind(Enum):
    PROGRAM = "Program"
    EXPRESSION_STATEMENT = "ExpressionStatement"
    BINARY_EXPRESSION = "BinaryExpression"
    UNARY_EXPRESSION = "UnaryExpression"
    CALL_EXPRESSION = "CallExpression"
    GROUP_EXPRESSION = "GroupExpression"
    NUMERIC_LITERAL = "NumericLiteral"
    HEX_LITERAL = "HexLiteral"
    PERCENT_LITERAL = "PercentLiteral"
    IDENTIFIER = "Identifier"


@dataclass(frozen=True, slots=True)
class Identifier:
    """Bare name, e.g. ``red`` or the callee of ``rgb(...)``."""

    kind: ClassVar[NodeKind] = NodeKind.IDENTIFIER

    name: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    kind: ClassVar[NodeKind] = NodeKind.NUMERIC_LITERAL

    value: int
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class HexLiteral:
    """Hex color, kept verbatim including the leading '#'."""

    kind: ClassVar[NodeKind] = NodeKind.HEX_LITERAL

    value: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class PercentLiteral:
    """Percentage; `value` is the numeric part with '%' stripped."""

    kind: ClassVar[NodeKind] = NodeKind.PERCENT_LITERAL

    value: int
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    kind: ClassVar[NodeKind] = NodeKind.BINARY_EXPRESSION

    operator: str
    left: Expression
    right: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class UnaryExpression:
    kind: ClassVar[NodeKind] = NodeKind.UNARY_EXPRESSION

    operator: str
    argument: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class CallExpression:
    """Function call: identifier immediately followed by '('."""

    kind: ClassVar[NodeKind] = NodeKind.CALL_EXPRESSION

    callee: Identifier
    arguments: tuple[Expression, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class GroupExpression:
    """Parenthesized sub-expression not preceded by a callee."""

    kind: ClassVar[NodeKind] = NodeKind.GROUP_EXPRESSION

    expression: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


Expression = Union[
    Identifier,
    NumericLiteral,
    HexLiteral,
    PercentLiteral,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    GroupExpression,
]


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION_STATEMENT

    expression: Expression
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class Program:
    """Root node."""

    kind: ClassVar[NodeKind] = NodeKind.PROGRAM

    body: tuple[ExpressionStatement, ...]
    span: Span | None = field(default=None, compare=False, repr=False)


Node = Union[Program, ExpressionStatement, Expression]
