"""Expression visitor base and the tree printer.

Subclass ExprVisitor and implement one ``visit_*`` method per node type.
The base class declares every method abstract, so a visitor that forgets a
node type cannot be instantiated.

Example — count binary operators:

    class BinaryCounter(ExprVisitor[int]):
        def visit_binary(self, node: Binary) -> int:
            return 1 + self.visit(node.left) + self.visit(node.right)

        def visit_grouping(self, node: Grouping) -> int:
            return self.visit(node.expression)

        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from loxscan.ast import (
    Binary,
    Expr,
    Grouping,
    LiteralFalse,
    LiteralNil,
    LiteralNumber,
    LiteralString,
    LiteralTrue,
    Unary,
)

R = TypeVar("R")


class ExprVisitor(ABC, Generic[R]):
    """Single-dispatch visitor over the closed set of Expr node types."""

    def visit(self, node: Expr) -> R:
        """Match-based dispatch to the visit_* method for *node*."""
        match node:
            case LiteralString():
                return self.visit_literal_string(node)
            case LiteralNumber():
                return self.visit_literal_number(node)
            case LiteralTrue():
                return self.visit_literal_true(node)
            case LiteralFalse():
                return self.visit_literal_false(node)
            case LiteralNil():
                return self.visit_literal_nil(node)
            case Grouping():
                return self.visit_grouping(node)
            case Unary():
                return self.visit_unary(node)
            case Binary():
                return self.visit_binary(node)
            case _:
                raise TypeError(f"not an expression node: {type(node).__name__}")

    @abstractmethod
    def visit_literal_string(self, node: LiteralString) -> R: ...

    @abstractmethod
    def visit_literal_number(self, node: LiteralNumber) -> R: ...

    @abstractmethod
    def visit_literal_true(self, node: LiteralTrue) -> R: ...

    @abstractmethod
    def visit_literal_false(self, node: LiteralFalse) -> R: ...

    @abstractmethod
    def visit_literal_nil(self, node: LiteralNil) -> R: ...

    @abstractmethod
    def visit_grouping(self, node: Grouping) -> R: ...

    @abstractmethod
    def visit_unary(self, node: Unary) -> R: ...

    @abstractmethod
    def visit_binary(self, node: Binary) -> R: ...


def format_number(value: float) -> str:
    """Shortest text for a number; integral values drop the fractional part."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class AstPrinter(ExprVisitor[str]):
    """Render an expression tree as flat prefix text.

    ``-55.5 * (77)`` renders as
    ``binary unary - literal 55.5 * grouping ( literal 77 )``.
    """

    def visit_literal_string(self, node: LiteralString) -> str:
        return f"literal {node.value}"

    def visit_literal_number(self, node: LiteralNumber) -> str:
        return f"literal {format_number(node.value)}"

    def visit_literal_true(self, node: LiteralTrue) -> str:
        return "literal true"

    def visit_literal_false(self, node: LiteralFalse) -> str:
        return "literal false"

    def visit_literal_nil(self, node: LiteralNil) -> str:
        return "literal nil"

    def visit_grouping(self, node: Grouping) -> str:
        return f"grouping ( {self.visit(node.expression)} )"

    def visit_unary(self, node: Unary) -> str:
        return f"unary {node.operator.lexeme} {self.visit(node.expression)}"

    def visit_binary(self, node: Binary) -> str:
        return (
            f"binary {self.visit(node.left)} {node.operator.lexeme} {self.visit(node.right)}"
        )


def print_ast(expr: Expr) -> str:
    """Convenience function: render *expr* with AstPrinter."""
    return AstPrinter().visit(expr)
