"""
Токены разделителей Liquid.

Определяет разделители вывода {{ }} и тегов {% %}, а также токен
содержимого между ними. Дефис у разделителя включает срезание
пробельных символов с соответствующей стороны.
"""

from __future__ import annotations

import re
from typing import List

from ..tags import MARKUP, OUTPUT_END, OUTPUT_START, TAG_END, TAG_START
from ..types import TokenSpec, WhitespaceStrip


def get_markup_token_specs() -> List[TokenSpec]:
    """
    Возвращает спецификации токенов разделителей.
    """
    return [
        # Разделители вывода {{ }}
        TokenSpec(
            name=OUTPUT_START,
            pattern=re.compile(r'\{\{-?'),
            priority=60,
            strip=WhitespaceStrip.BEFORE,
        ),

        TokenSpec(
            name=OUTPUT_END,
            pattern=re.compile(r'-?\}\}'),
            priority=60,
            strip=WhitespaceStrip.AFTER,
        ),

        # Разделители тегов {% %}
        TokenSpec(
            name=TAG_START,
            pattern=re.compile(r'\{%-?'),
            priority=60,
            strip=WhitespaceStrip.BEFORE,
        ),

        TokenSpec(
            name=TAG_END,
            pattern=re.compile(r'-?%\}'),
            priority=60,
            strip=WhitespaceStrip.AFTER,
        ),

        # Содержимое между разделителями: всё до ближайшего закрывающего
        TokenSpec(
            name=MARKUP,
            pattern=re.compile(r'(?:[^}%-]|-(?!\}\}|%\})|\}(?!\})|%(?!\}))+'),
            priority=40,
        ),
    ]


__all__ = ["get_markup_token_specs"]
