"""
Плагин разделителей Liquid.

Регистрирует токены {{ }} и {% %}, вывод выражений и запасное правило,
которое превращает нераспознанные теги в пустой вывод.
"""

from __future__ import annotations

from typing import List

from .parser_rules import get_markup_parser_rules
from .processor_rules import get_markup_processor_rules
from .tokens import get_markup_token_specs
from ..base import TemplatePlugin
from ..tags import MARKUP, OUTPUT_END, OUTPUT_START, TAG_END, TAG_START
from ..types import PluginPriority, TokenSpec, ParsingRule, ProcessorRule, TokenContext


class MarkupPlugin(TemplatePlugin):
    """
    Плагин разметки.

    Обеспечивает функциональность:
    - {{ expr | filter }} - вывод выражений
    - {{- ... -}}, {%- ... -%} - срезание пробелов у разделителей
    - неизвестные теги рендерятся пустой строкой
    """

    @property
    def name(self) -> str:
        """Возвращает имя плагина."""
        return "markup"

    @property
    def priority(self) -> PluginPriority:
        """Возвращает приоритет плагина."""
        return PluginPriority.OUTPUT

    def register_tokens(self) -> List[TokenSpec]:
        """Регистрирует токены разделителей."""
        return get_markup_token_specs()

    def register_token_contexts(self) -> List[TokenContext]:
        """Внутри разделителей распознаётся только содержимое и закрывающий токен."""
        return [
            TokenContext(
                name="output",
                open_tokens={OUTPUT_START},
                close_tokens={OUTPUT_END},
                inner_tokens={MARKUP},
                allow_nesting=False,
            ),
            TokenContext(
                name="tag",
                open_tokens={TAG_START},
                close_tokens={TAG_END},
                inner_tokens={MARKUP},
                allow_nesting=False,
            ),
        ]

    def register_parser_rules(self) -> List[ParsingRule]:
        """Регистрирует правила парсинга вывода и неизвестных тегов."""
        return get_markup_parser_rules(self._parse_next_node)

    def register_processors(self) -> List[ProcessorRule]:
        """Регистрирует обработчики узлов (обработчики ядра доступны после initialize)."""
        return get_markup_processor_rules(lambda: self.handlers)


__all__ = ["MarkupPlugin"]
