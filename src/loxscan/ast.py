"""Expression tree node types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from loxscan.tokens import Token

if TYPE_CHECKING:
    from loxscan.visitor import ExprVisitor

R = TypeVar("R")


class _Node:
    __slots__ = ()

    def accept(self, visitor: ExprVisitor[R]) -> R:
        """Hand this node to *visitor* and return its result."""
        return visitor.visit(self)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class LiteralString(_Node):
    """String literal, value without quotes."""

    value: str


@dataclass(frozen=True, slots=True)
class LiteralNumber(_Node):
    value: float


@dataclass(frozen=True, slots=True)
class LiteralTrue(_Node):
    pass


@dataclass(frozen=True, slots=True)
class LiteralFalse(_Node):
    pass


@dataclass(frozen=True, slots=True)
class LiteralNil(_Node):
    pass


@dataclass(frozen=True, slots=True)
class Grouping(_Node):
    """Parenthesized expression."""

    expression: Expr


@dataclass(frozen=True, slots=True)
class Unary(_Node):
    """Prefix operator applied to one operand: -x, !x."""

    operator: Token
    expression: Expr


@dataclass(frozen=True, slots=True)
class Binary(_Node):
    """Infix operator between two operands."""

    left: Expr
    operator: Token
    right: Expr


Expr = (
    LiteralString
    | LiteralNumber
    | LiteralTrue
    | LiteralFalse
    | LiteralNil
    | Grouping
    | Unary
    | Binary
)

EXPR_TYPES: tuple[type, ...] = (
    LiteralString,
    LiteralNumber,
    LiteralTrue,
    LiteralFalse,
    LiteralNil,
    Grouping,
    Unary,
    Binary,
)
