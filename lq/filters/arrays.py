"""
Array filters.

Scalars are promoted to one-element lists (nil to an empty list) before any
array operation, so a filter chain never fails on a missing collection.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from .registry import FilterFunc
from ..values import Value, is_number, is_truthy, lookup, to_decimal, to_list, to_str, values_equal


def _items(value: Value) -> List[Any]:
    # Strings are iterated as a single element
    if isinstance(value, dict):
        return [value]
    return to_list(value)


def _property(item: Value, key: Value) -> Value:
    if key is None:
        return item
    return lookup(item, key)


def first(value: Value) -> Value:
    if isinstance(value, str):
        return value[:1] or None
    items = _items(value)
    return items[0] if items else None


def last(value: Value) -> Value:
    if isinstance(value, str):
        return value[-1:] or None
    items = _items(value)
    return items[-1] if items else None


def join(value: Value, separator: Value = " ") -> str:
    return to_str(separator).join(to_str(item) for item in _items(value))


def reverse(value: Value) -> List[Any]:
    return list(reversed(_items(value)))


def concat(value: Value, other: Value = None) -> List[Any]:
    return _items(value) + _items(other)


def where(value: Value, key: Value = None, target: Value = None) -> List[Any]:
    """
    Keeps items whose property equals target.

    Without a target the property only has to be truthy.
    """
    name = to_str(key)
    if target is None:
        return [item for item in _items(value) if is_truthy(lookup(item, name))]
    return [item for item in _items(value) if values_equal(lookup(item, name), target)]


def map_(value: Value, key: Value = None) -> List[Any]:
    name = to_str(key)
    return [lookup(item, name) for item in _items(value)]


def _sort_key(item: Value):
    # nil sorts last; numbers before strings
    if item is None:
        return (2, Decimal(0), "")
    if is_number(item):
        return (0, to_decimal(item), "")
    return (1, Decimal(0), to_str(item))


def sort(value: Value, key: Value = None) -> List[Any]:
    name = to_str(key) if key is not None else None
    return sorted(_items(value), key=lambda item: _sort_key(_property(item, name)))


def sort_natural(value: Value, key: Value = None) -> List[Any]:
    name = to_str(key) if key is not None else None

    def natural(item: Value):
        prop = _property(item, name)
        return (prop is None, to_str(prop).lower())

    return sorted(_items(value), key=natural)


def uniq(value: Value, key: Value = None) -> List[Any]:
    name = to_str(key) if key is not None else None
    result: List[Any] = []
    seen: List[Any] = []
    for item in _items(value):
        marker = _property(item, name)
        if any(values_equal(marker, other) for other in seen):
            continue
        seen.append(marker)
        result.append(item)
    return result


def compact(value: Value, key: Value = None) -> List[Any]:
    name = to_str(key) if key is not None else None
    return [item for item in _items(value) if _property(item, name) is not None]


def sum_(value: Value, key: Value = None) -> Value:
    name = to_str(key) if key is not None else None
    total = Decimal(0)
    has_fraction = False
    for item in _items(value):
        prop = _property(item, name)
        if isinstance(prop, str):
            try:
                prop = Decimal(prop.strip())
            except ArithmeticError:
                continue
        if not is_number(prop):
            continue
        if isinstance(prop, float) or (isinstance(prop, Decimal) and prop != prop.to_integral_value()):
            has_fraction = True
        total += to_decimal(prop)
    return float(total) if has_fraction else int(total)


FILTERS: Dict[str, FilterFunc] = {
    "first": first,
    "last": last,
    "join": join,
    "reverse": reverse,
    "concat": concat,
    "where": where,
    "map": map_,
    "sort": sort,
    "sort_natural": sort_natural,
    "uniq": uniq,
    "compact": compact,
    "sum": sum_,
}


__all__ = ["FILTERS"]
