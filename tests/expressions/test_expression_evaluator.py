"""
Тесты вычислителя выражений lq.expressions.evaluator.
"""

import pytest

from lq.expressions import ExpressionEvaluator, parse_condition, parse_output
from lq.filters import create_filter_registry
from lq.scope import Scope


@pytest.fixture
def scope():
    return Scope(
        globals_={"shop": {"name": "My Store"}},
        frame={
            "product": {"title": "Shirt", "tags": ["sale", "new"], "price": 1999},
            "items": [1, 2, 3],
            "name": "world",
            "empty_list": [],
            "spaces": "   ",
            "zero": 0,
        },
    )


@pytest.fixture
def evaluator(scope):
    return ExpressionEvaluator(scope, create_filter_registry())


def ev(evaluator, text):
    return evaluator.evaluate(parse_output(text))


def cond(evaluator, text):
    return evaluator.test(parse_condition(text))


class TestPaths:

    def test_nested_lookup(self, evaluator):
        assert ev(evaluator, "product.title") == "Shirt"

    def test_missing_segment_is_nil(self, evaluator):
        assert ev(evaluator, "product.vendor.name") is None
        assert ev(evaluator, "nothing.at.all") is None

    def test_globals_are_visible(self, evaluator):
        assert ev(evaluator, "shop.name") == "My Store"

    def test_pseudo_properties(self, evaluator):
        assert ev(evaluator, "items.size") == 3
        assert ev(evaluator, "items.first") == 1
        assert ev(evaluator, "items.last") == 3
        assert ev(evaluator, "name.size") == 5

    def test_index_access(self, evaluator):
        assert ev(evaluator, "items[1]") == 2
        assert ev(evaluator, "items[-1]") == 3
        assert ev(evaluator, "items[10]") is None

    def test_range_is_inclusive(self, evaluator):
        assert ev(evaluator, "(1..4)") == [1, 2, 3, 4]
        assert ev(evaluator, "(3..1)") == []


class TestFilters:

    def test_left_to_right(self, evaluator):
        assert ev(evaluator, "name | upcase | prepend: 'hello '") == "hello WORLD"

    def test_unknown_filter_passes_value(self, evaluator):
        assert ev(evaluator, "name | no_such_filter") == "world"

    def test_filter_arguments_are_resolved(self, evaluator):
        assert ev(evaluator, "'x' | append: name") == "xworld"


class TestConditions:

    def test_truthiness(self, evaluator):
        assert cond(evaluator, "zero") is True
        assert cond(evaluator, "empty_list") is True
        assert cond(evaluator, "missing") is False
        assert cond(evaluator, "false") is False

    def test_comparisons(self, evaluator):
        assert cond(evaluator, "product.price > 1000")
        assert cond(evaluator, "product.price == 1999.0")
        assert cond(evaluator, "name != 'x'")
        assert not cond(evaluator, "name < 1")

    def test_contains(self, evaluator):
        assert cond(evaluator, "product.tags contains 'sale'")
        assert cond(evaluator, "name contains 'orl'")
        assert not cond(evaluator, "product.tags contains 'old'")

    def test_empty_and_blank(self, evaluator):
        assert cond(evaluator, "empty_list == empty")
        assert cond(evaluator, "spaces == blank")
        assert not cond(evaluator, "spaces == empty")
        assert cond(evaluator, "items != empty")

    def test_logical_operators(self, evaluator):
        assert cond(evaluator, "zero and name")
        assert cond(evaluator, "missing or name")
        # and/or правоассоциативны: false and (false or true)
        assert not cond(evaluator, "false and false or true")
