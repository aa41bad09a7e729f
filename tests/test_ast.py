"""Tests for expression nodes, the visitor base, and the tree printer."""

from __future__ import annotations

import dataclasses
import re

import pytest

from loxscan.ast import (
    EXPR_TYPES,
    Binary,
    Grouping,
    LiteralFalse,
    LiteralNil,
    LiteralNumber,
    LiteralString,
    LiteralTrue,
    Unary,
)
from loxscan.scanner import tokenize
from loxscan.tokens import Token
from loxscan.visitor import AstPrinter, ExprVisitor, format_number, print_ast


def _op(lexeme: str) -> Token:
    return tokenize(lexeme)[0]


# =============================================================================
# Printer output
# =============================================================================


class TestLiterals:
    def test_string_is_bare(self) -> None:
        assert print_ast(LiteralString("hello world")) == "literal hello world"

    def test_fractional_number(self) -> None:
        assert print_ast(LiteralNumber(55.5)) == "literal 55.5"

    def test_integral_number(self) -> None:
        assert print_ast(LiteralNumber(77.0)) == "literal 77"

    def test_keywords(self) -> None:
        assert print_ast(LiteralTrue()) == "literal true"
        assert print_ast(LiteralFalse()) == "literal false"
        assert print_ast(LiteralNil()) == "literal nil"


class TestCompound:
    def test_grouping(self) -> None:
        assert print_ast(Grouping(LiteralNil())) == "grouping ( literal nil )"

    def test_unary(self) -> None:
        expr = Unary(_op("!"), LiteralTrue())
        assert print_ast(expr) == "unary ! literal true"

    def test_binary(self) -> None:
        expr = Binary(LiteralNumber(1.0), _op("=="), LiteralNumber(2.5))
        assert print_ast(expr) == "binary literal 1 == literal 2.5"

    def test_nested(self) -> None:
        expr = Binary(
            Unary(_op("-"), LiteralNumber(55.5)),
            _op("*"),
            Grouping(LiteralNumber(77.0)),
        )
        assert print_ast(expr) == "binary unary - literal 55.5 * grouping ( literal 77 )"

    def test_deep_grouping(self) -> None:
        expr = Grouping(Grouping(LiteralString("x")))
        assert print_ast(expr) == "grouping ( grouping ( literal x ) )"


class TestFormatNumber:
    def test_values(self) -> None:
        assert format_number(0.0) == "0"
        assert format_number(-3.0) == "-3"
        assert format_number(0.1) == "0.1"
        assert format_number(1e21) == "1000000000000000000000"


# =============================================================================
# Visitor contract
# =============================================================================


class TestExhaustiveness:
    def test_one_visit_method_per_node_type(self) -> None:
        methods = {
            name for name in ExprVisitor.__abstractmethods__ if name.startswith("visit_")
        }
        expected = {
            "visit_" + re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()
            for cls in EXPR_TYPES
        }
        assert methods == expected
        assert "visit_literal_string" in expected

    def test_printer_handles_every_node_type(self) -> None:
        samples = {
            LiteralString: LiteralString("s"),
            LiteralNumber: LiteralNumber(1.0),
            LiteralTrue: LiteralTrue(),
            LiteralFalse: LiteralFalse(),
            LiteralNil: LiteralNil(),
            Grouping: Grouping(LiteralNil()),
            Unary: Unary(_op("-"), LiteralNumber(1.0)),
            Binary: Binary(LiteralNumber(1.0), _op("+"), LiteralNumber(2.0)),
        }
        assert set(samples) == set(EXPR_TYPES)
        for node in samples.values():
            rendered = AstPrinter().visit(node)
            assert rendered.split(" ", 1)[0] in {"literal", "grouping", "unary", "binary"}

    def test_incomplete_visitor_cannot_be_instantiated(self) -> None:
        class OnlyLiterals(ExprVisitor[str]):
            def visit_literal_string(self, node: LiteralString) -> str:
                return node.value

        with pytest.raises(TypeError):
            OnlyLiterals()  # type: ignore[abstract]

    def test_non_expression_rejected(self) -> None:
        with pytest.raises(TypeError, match="not an expression node"):
            AstPrinter().visit("1 + 2")  # type: ignore[arg-type]


class DepthCounter(ExprVisitor[int]):
    """Counts the height of a tree."""

    def visit_literal_string(self, node: LiteralString) -> int:
        return 1

    def visit_literal_number(self, node: LiteralNumber) -> int:
        return 1

    def visit_literal_true(self, node: LiteralTrue) -> int:
        return 1

    def visit_literal_false(self, node: LiteralFalse) -> int:
        return 1

    def visit_literal_nil(self, node: LiteralNil) -> int:
        return 1

    def visit_grouping(self, node: Grouping) -> int:
        return 1 + self.visit(node.expression)

    def visit_unary(self, node: Unary) -> int:
        return 1 + self.visit(node.expression)

    def visit_binary(self, node: Binary) -> int:
        return 1 + max(self.visit(node.left), self.visit(node.right))


class TestAccept:
    def test_accept_dispatches_to_visitor(self) -> None:
        expr = Binary(Grouping(LiteralTrue()), _op("or"), LiteralFalse())
        assert expr.accept(DepthCounter()) == 3
        assert expr.accept(AstPrinter()) == "binary grouping ( literal true ) or literal false"


class TestNodes:
    def test_nodes_are_frozen(self) -> None:
        node = LiteralNumber(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 2.0  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert Grouping(LiteralNil()) == Grouping(LiteralNil())
        assert LiteralTrue() != LiteralFalse()
