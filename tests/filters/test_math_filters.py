"""
Математические фильтры.
"""

import pytest


class TestMathFilters:

    @pytest.mark.parametrize("name,value,args,expected", [
        ("plus", 4, (2,), 6),
        ("minus", 4, (2,), 2),
        ("times", 4, (2,), 8),
        ("divided_by", 7, (2,), 3),
        ("modulo", 7, (3,), 1),
        ("abs", -5, (), 5),
        ("ceil", 1.2, (), 2),
        ("floor", 1.8, (), 1),
        ("round", 2.5, (), 3),
        ("at_least", 3, (5,), 5),
        ("at_most", 7, (5,), 5),
    ])
    def test_integer_results(self, apply, name, value, args, expected):
        assert apply(name, value, *args) == expected

    def test_divided_by_float(self, apply):
        assert apply("divided_by", 7, 2.0) == pytest.approx(3.5)

    def test_round_digits(self, apply):
        assert apply("round", 3.14159, 2) == pytest.approx(3.14)

    def test_strings_are_coerced(self, apply):
        assert apply("plus", "3", "4") == 7
        assert apply("times", "abc", 3) == 0

    def test_division_by_zero_passes_value(self, apply):
        # Ошибка фильтра не выходит за пределы конвейера
        assert apply("divided_by", 5, 0) == 5
