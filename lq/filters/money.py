"""
Money and weight filters.

Amounts are integer minor units (cents). The only division by 100 happens
inside _major(), on a Decimal, right before formatting.
"""

from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

from .registry import FilterFunc
from ..values import Value, to_decimal

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_CENT = Decimal("0.01")


def _major(cents: Value) -> Decimal:
    return (to_decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)


def _group(amount: Decimal, thousands: str, decimal_mark: str, places: int = 2) -> str:
    quantum = Decimal(1).scaleb(-places)
    text = f"{amount.quantize(quantum, rounding=ROUND_HALF_UP):,.{places}f}"
    return text.replace(",", "\0").replace(".", decimal_mark).replace("\0", thousands)


def format_amount(cents: Value, money_format: str) -> str:
    """
    Fills a shop money format such as ``${{amount}}``.

    Supported placeholders: amount, amount_no_decimals,
    amount_with_comma_separator, amount_no_decimals_with_comma_separator.
    """
    amount = _major(cents)

    def substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name == "amount":
            return f"{amount:.2f}"
        if name == "amount_no_decimals":
            return _group(amount, ",", ".", 0)
        if name == "amount_with_comma_separator":
            return _group(amount, ".", ",")
        if name == "amount_no_decimals_with_comma_separator":
            return _group(amount, ".", ",", 0)
        return match.group(0)

    return _PLACEHOLDER_RE.sub(substitute, money_format)


def create_money_filters(money_format: str = "${{amount}}", currency: str = "USD") -> Dict[str, FilterFunc]:
    """Builds money filters bound to the shop's format and currency."""

    def money(value: Value) -> str:
        return format_amount(value, money_format)

    def money_with_currency(value: Value) -> str:
        return f"{format_amount(value, money_format)} {currency}"

    def money_without_currency(value: Value) -> str:
        return f"{_major(value):.2f}"

    def money_without_trailing_zeros(value: Value) -> str:
        amount = _major(value)
        if amount == amount.to_integral_value():
            return _PLACEHOLDER_RE.sub(f"{int(amount)}", money_format)
        return format_amount(value, money_format)

    return {
        "money": money,
        "money_with_currency": money_with_currency,
        "money_without_currency": money_without_currency,
        "money_without_trailing_zeros": money_without_trailing_zeros,
    }


def weight_with_unit(value: Value) -> str:
    grams = to_decimal(value)
    if grams >= 1000:
        return f"{(grams / 1000).quantize(_CENT, rounding=ROUND_HALF_UP)} kg"
    return f"{grams.normalize():f} g"


FILTERS: Dict[str, FilterFunc] = {
    "weight_with_unit": weight_with_unit,
}


__all__ = ["FILTERS", "create_money_filters", "format_amount"]
