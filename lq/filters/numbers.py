"""
Math filters.

Operands are coerced with to_number (unparsable input counts as 0).
Integer arithmetic stays integral; divided_by floors when both operands
are integers.
"""

from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

from .registry import FilterFunc
from ..values import Number, Value, to_int, to_number


def abs_(value: Value) -> Number:
    return abs(to_number(value))


def ceil(value: Value) -> int:
    return int(math.ceil(to_number(value)))


def floor(value: Value) -> int:
    return int(math.floor(to_number(value)))


def round_(value: Value, digits: Value = 0) -> Number:
    places = to_int(digits)
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(to_number(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    if places <= 0:
        return int(rounded)
    return float(rounded)


def plus(value: Value, operand: Value = 0) -> Number:
    return to_number(value) + to_number(operand)


def minus(value: Value, operand: Value = 0) -> Number:
    return to_number(value) - to_number(operand)


def times(value: Value, operand: Value = 1) -> Number:
    return to_number(value) * to_number(operand)


def divided_by(value: Value, divisor: Value = 1) -> Number:
    left, right = to_number(value), to_number(divisor)
    if isinstance(left, int) and isinstance(right, int):
        return left // right
    return left / right


def modulo(value: Value, divisor: Value = 1) -> Number:
    left, right = to_number(value), to_number(divisor)
    if isinstance(left, int) and isinstance(right, int):
        return left % right
    return math.fmod(left, right)


def at_least(value: Value, minimum: Value = 0) -> Number:
    return max(to_number(value), to_number(minimum))


def at_most(value: Value, maximum: Value = 0) -> Number:
    return min(to_number(value), to_number(maximum))


FILTERS: Dict[str, FilterFunc] = {
    "abs": abs_,
    "ceil": ceil,
    "floor": floor,
    "round": round_,
    "plus": plus,
    "minus": minus,
    "times": times,
    "divided_by": divided_by,
    "modulo": modulo,
    "at_least": at_least,
    "at_most": at_most,
}


__all__ = ["FILTERS"]
