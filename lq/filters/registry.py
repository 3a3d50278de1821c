"""
Filter registry: a name -> function table consulted by the expression evaluator.

Every filter is a plain callable ``func(value, *args, **kwargs) -> Value``.
Filters never raise on a type mismatch: they coerce or pass the value through.
A filter that raises anyway is logged and treated as a pass-through, so that
one bad pipeline step never escapes the enclosing tag.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..values import Value

logger = logging.getLogger(__name__)

FilterFunc = Callable[..., Value]


class FilterRegistry:
    """Name -> filter function table."""

    def __init__(self):
        self._filters: Dict[str, FilterFunc] = {}

    def register(self, name: str, func: FilterFunc) -> None:
        if name in self._filters:
            logger.debug(f"Filter '{name}' overwrites existing filter")
        self._filters[name] = func

    def register_all(self, filters: Mapping[str, FilterFunc]) -> None:
        for name, func in filters.items():
            self.register(name, func)

    def get(self, name: str) -> Optional[FilterFunc]:
        return self._filters.get(name)

    def names(self) -> List[str]:
        return sorted(self._filters)

    def __contains__(self, name: str) -> bool:
        return name in self._filters

    def apply(self, name: str, value: Value, args: List[Value], kwargs: Dict[str, Any]) -> Value:
        """
        Applies a filter by name.

        Unknown filters and filters failing on unexpected input pass the value
        through unchanged.
        """
        func = self._filters.get(name)
        if func is None:
            logger.warning(f"Unknown filter '{name}', value passed through")
            return value
        try:
            return func(value, *args, **kwargs)
        except (TypeError, ValueError, ArithmeticError, LookupError, AttributeError) as e:
            logger.warning(f"Filter '{name}' failed on {type(value).__name__} input: {e}")
            return value


__all__ = ["FilterFunc", "FilterRegistry"]
