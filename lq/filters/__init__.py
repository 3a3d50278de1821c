"""
Filter registry assembly.

The registry is built once per engine: the static families plus the filters
that close over engine state (money format, URL prefixes, locale resolver).
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from . import arrays, dates, design, encoding, media, money, numbers, strings, urls
from .registry import FilterFunc, FilterRegistry
from ..config import EngineConfig
from ..values import Value, to_str

Translator = Callable[[str, Dict[str, Value]], str]


def _create_translate_filter(translator: Translator) -> FilterFunc:
    def translate(key: Value, *args: Value, **kwargs: Value) -> str:
        return translator(to_str(key), dict(kwargs))
    return translate


def create_filter_registry(config: Optional[EngineConfig] = None,
                           translator: Optional[Translator] = None) -> FilterRegistry:
    """
    Builds the filter registry for one engine instance.

    Args:
        config: Engine configuration (money format, currency, URL prefixes)
        translator: Locale lookup behind the t/translate filters;
                    without it the key itself is returned
    """
    cfg = config or EngineConfig()
    registry = FilterRegistry()

    for family in (strings, encoding, numbers, arrays, dates, design, urls, media, money):
        registry.register_all(family.FILTERS)

    registry.register_all(money.create_money_filters(cfg.money_format, cfg.currency))
    registry.register_all(urls.create_url_filters(cfg.asset_url_prefix, cfg.file_url_prefix))

    translate = _create_translate_filter(translator or (lambda key, subs: key))
    registry.register("t", translate)
    registry.register("translate", translate)

    return registry


__all__ = ["FilterFunc", "FilterRegistry", "Translator", "create_filter_registry"]
