"""
Правила парсинга разметки: вывод {{ ... }} и запасное правило
для нераспознанных конструкций.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .nodes import OutputNode, UnknownTagNode
from ..nodes import TemplateNode
from ..tags import OUTPUT_END, OUTPUT_START, TAG_START, ParseNextNodeFunc, peek_tag, read_tag
from ..tokens import ParserError, TokenType
from ..types import PluginPriority, ParsingRule, ParsingContext
from ...expressions import parse_output

logger = logging.getLogger(__name__)


class MarkupParserRules:
    """
    Класс правил парсинга разделителей.

    Инкапсулирует правила с доступом к функтору рекурсивного
    парсинга через состояние экземпляра.
    """

    def __init__(self, parse_next_node: ParseNextNodeFunc):
        """
        Инициализирует правила парсинга.

        Args:
            parse_next_node: Функтор для рекурсивного парсинга следующего узла
        """
        self.parse_next_node = parse_next_node

    def parse_output(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Парсит вывод {{ expr | filter: arg }}.
        """
        if not context.match(OUTPUT_START):
            return None

        markup = self._read_output_markup(context)
        return OutputNode(expression=parse_output(markup), markup=markup.strip())

    def parse_invalid(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Запасное правило: превращает тег или вывод, которые не разобрало
        ни одно другое правило, в UnknownTagNode.

        Незавершённая конструкция (нет закрывающего разделителя)
        остаётся обычным текстом.
        """
        reason = str(context.last_error) if context.last_error else ""

        if context.match(TAG_START):
            header = peek_tag(context)
            if header is None:
                return None
            read_tag(context)
            return UnknownTagNode(name=header.name, markup=header.markup, reason=self._tag_reason(header.name, reason, context))

        if context.match(OUTPUT_START):
            try:
                markup = self._read_output_markup(context)
            except ParserError:
                return None
            return UnknownTagNode(name="{{", markup=markup.strip(), reason=reason or "Invalid output")

        return None

    @staticmethod
    def _tag_reason(name: str, error: str, context: ParsingContext) -> str:
        if name in context.known_tags:
            return f"Malformed '{name}' tag: {error}" if error else f"Malformed '{name}' tag"
        # endif, endfor, ... вне своего блока
        if name.startswith("end") and name[3:] in context.known_tags:
            return f"Unexpected '{name}'"
        return f"Unknown tag '{name}'"

    def _read_output_markup(self, context: ParsingContext) -> str:
        """Потребляет {{ ... }} и возвращает содержимое."""
        start = context.consume(OUTPUT_START)

        parts: List[str] = []
        while not context.match(OUTPUT_END):
            if context.is_at_end() or context.current().type == TokenType.EOF.value:
                raise ParserError("Unexpected end of template, expected }}", start)
            parts.append(context.advance().value)

        context.consume(OUTPUT_END)
        return "".join(parts)


def get_markup_parser_rules(parse_next_node: ParseNextNodeFunc) -> List[ParsingRule]:
    """
    Возвращает правила парсинга разметки.

    Args:
        parse_next_node: Функтор для рекурсивного парсинга

    Returns:
        Список правил парсинга с привязанными функторами
    """
    rules_instance = MarkupParserRules(parse_next_node)

    return [
        ParsingRule(
            name="output",
            priority=PluginPriority.OUTPUT,
            parser_func=rules_instance.parse_output,
        ),
        ParsingRule(
            name="unknown_tag",
            priority=PluginPriority.FALLBACK,
            parser_func=rules_instance.parse_invalid,
        ),
    ]


__all__ = ["MarkupParserRules", "get_markup_parser_rules"]
