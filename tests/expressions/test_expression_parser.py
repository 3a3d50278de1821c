"""
Тесты парсера выражений lq.expressions.parser.
"""

import pytest

from lq.expressions import ExpressionError, FilteredExpression, Literal, VariablePath, parse_condition, parse_output
from lq.expressions.model import Comparison, Logical, RangeExpression, SpecialLiteral


class TestOutputExpressions:
    """Выражения {{ ... }}."""

    def test_string_literal(self):
        assert parse_output("'hello'") == Literal("hello")
        assert parse_output('"hello"') == Literal("hello")

    def test_number_literals(self):
        assert parse_output("42") == Literal(42)
        assert parse_output("-3") == Literal(-3)
        assert parse_output("1.5").value == pytest.approx(1.5)

    def test_keyword_literals(self):
        assert parse_output("true") == Literal(True)
        assert parse_output("false") == Literal(False)
        assert parse_output("nil") == Literal(None)
        assert parse_output("null") == Literal(None)

    def test_dotted_path(self):
        expr = parse_output("section.settings.heading")
        assert isinstance(expr, VariablePath)
        assert expr.name == "section"
        assert expr.segments == ("settings", "heading")

    def test_bracket_segment(self):
        expr = parse_output("product['title']")
        assert isinstance(expr, VariablePath)
        assert expr.name == "product"
        assert expr.segments == (Literal("title"),)

    def test_question_mark_identifier(self):
        expr = parse_output("product.available?")
        assert isinstance(expr, VariablePath)
        assert expr.segments == ("available?",)

    def test_filters_in_order(self):
        expr = parse_output("title | upcase | append: '!', 'x'")
        assert isinstance(expr, FilteredExpression)
        assert [f.name for f in expr.filters] == ["upcase", "append"]
        assert expr.filters[1].args == (Literal("!"), Literal("x"))

    def test_filter_keyword_arguments(self):
        expr = parse_output("'a' | link_to: '/x', class: 'btn'")
        call = expr.filters[0]
        assert call.args == (Literal("/x"),)
        assert call.kwargs == (("class", Literal("btn")),)

    def test_range(self):
        expr = parse_output("(1..3)")
        assert isinstance(expr, RangeExpression)

    def test_trailing_garbage_is_an_error(self):
        with pytest.raises(ExpressionError):
            parse_output("a b")

    def test_unterminated_string_is_an_error(self):
        with pytest.raises(ExpressionError):
            parse_output("'abc")


class TestConditions:
    """Условия if/unless/elsif."""

    def test_comparison(self):
        expr = parse_condition("a == 1")
        assert isinstance(expr, Comparison)
        assert expr.operator == "=="

    def test_diamond_is_not_equal(self):
        expr = parse_condition("a <> 1")
        assert isinstance(expr, Comparison)
        assert expr.operator == "!="

    def test_contains(self):
        expr = parse_condition("tags contains 'sale'")
        assert isinstance(expr, Comparison)
        assert expr.operator == "contains"

    def test_and_or_are_right_associative(self):
        expr = parse_condition("a and b or c")
        assert isinstance(expr, Logical)
        assert expr.operator == "and"
        assert isinstance(expr.right, Logical)
        assert expr.right.operator == "or"

    def test_empty_and_blank(self):
        expr = parse_condition("x == empty")
        assert isinstance(expr.right, SpecialLiteral)
        assert expr.right.kind == "empty"
