"""
Правила парсинга тегов темы.

Блочные теги с разбираемым телом (form, paginate, style, capture,
tablerow) парсятся рекурсивно, поэтому вложенный одноимённый тег
закрывается собственным end-тегом. Теги с сырым телом (schema,
stylesheet, javascript) захватывают текст с подсчётом глубины.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .nodes import (
    CaptureNode,
    ContentForNode,
    CycleNode,
    DecrementNode,
    FormNode,
    IncludeNode,
    IncrementNode,
    JavascriptNode,
    LayoutNode,
    NamedArgument,
    PaginateNode,
    RenderNode,
    SchemaNode,
    SectionTagNode,
    SectionsTagNode,
    StyleNode,
    StylesheetNode,
    TablerowNode,
)
from ..nodes import TemplateNode
from ..tags import ParseNextNodeFunc, TagHeader, capture_raw, parse_body, peek_tag, read_tag
from ..types import PluginPriority, ParsingRule, ParsingContext
from ...expressions import Expression, ExpressionError, ExpressionParser, Literal, VariablePath

TagParser = Callable[[TagHeader, ParsingContext], TemplateNode]


def static_name(expression: Expression) -> Optional[str]:
    """Имя из строкового литерала или голого идентификатора."""
    if isinstance(expression, Literal) and isinstance(expression.value, str):
        return expression.value
    if isinstance(expression, VariablePath) and expression.name and not expression.segments:
        return expression.name
    return None


class ShopifyParserRules:
    """
    Класс правил парсинга тегов темы.

    Инкапсулирует все правила парсинга с доступом к функтору
    рекурсивного парсинга через состояние экземпляра.
    """

    def __init__(self, parse_next_node: ParseNextNodeFunc):
        """
        Инициализирует правила парсинга.

        Args:
            parse_next_node: Функтор для рекурсивного парсинга следующего узла
        """
        self.parse_next_node = parse_next_node

        # Закрытая таблица тегов плагина, разрешается один раз при парсинге
        self._tags: Dict[str, TagParser] = {
            "section": self._parse_section,
            "sections": self._parse_sections,
            "render": self._parse_render,
            "include": self._parse_include,
            "form": self._parse_form,
            "paginate": self._parse_paginate,
            "schema": lambda header, context: SchemaNode(text=capture_raw(context, "schema")),
            "stylesheet": lambda header, context: StylesheetNode(text=capture_raw(context, "stylesheet")),
            "javascript": lambda header, context: JavascriptNode(text=capture_raw(context, "javascript")),
            "style": self._parse_style,
            "layout": self._parse_layout,
            "content_for": self._parse_content_for,
            "capture": self._parse_capture,
            "increment": lambda header, context: IncrementNode(name=self._name_argument(header)),
            "decrement": lambda header, context: DecrementNode(name=self._name_argument(header)),
            "cycle": self._parse_cycle,
            "tablerow": self._parse_tablerow,
        }

    @property
    def tag_names(self) -> List[str]:
        return list(self._tags)

    def parse_theme_tag(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Парсит тег темы {% name ... %}.

        Возвращает None для тегов других плагинов.
        """
        header = peek_tag(context)
        if header is None or header.name not in self._tags:
            return None

        read_tag(context)
        return self._tags[header.name](header, context)

    # ---- секции и сниппеты ----

    def _parse_section(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return SectionTagNode(name=self._name_argument(header))

    def _parse_sections(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return SectionsTagNode(group=self._name_argument(header))

    def _parse_render(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return RenderNode(**self._parse_snippet_call(header))

    def _parse_include(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return IncludeNode(**self._parse_snippet_call(header))

    def _parse_snippet_call(self, header: TagHeader) -> dict:
        """
        Разбирает аргументы render/include:
        'name' [with expr [as alias]] [for expr [as alias]] [, key: value]*
        """
        parser = ExpressionParser()
        parser.reset(header.markup)

        snippet = parser.parse_primary()
        with_expr = for_expr = None
        alias = None

        if not parser.check_named_argument():
            if parser.match_word("with"):
                with_expr = parser.parse_primary()
                if parser.match_word("as"):
                    alias = parser.expect_identifier()
            elif parser.match_word("for"):
                for_expr = parser.parse_primary()
                if parser.match_word("as"):
                    alias = parser.expect_identifier()

        return {
            "snippet": snippet,
            "arguments": self._parse_named_arguments(parser),
            "with_expr": with_expr,
            "for_expr": for_expr,
            "alias": alias,
        }

    # ---- блоки с разбираемым телом ----

    def _parse_form(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        form_type = parser.parse_primary()
        # Объект формы (form 'product', product) на вывод не влияет
        if parser.match_symbol(",") and not parser.check_named_argument():
            parser.parse_primary()
        arguments = self._parse_named_arguments(parser)

        body, _ = parse_body(context, self.parse_next_node, {"endform"})
        return FormNode(form_type=form_type, body=body, arguments=arguments)

    def _parse_paginate(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        collection = parser.parse_primary()
        page_size = parser.parse_primary() if parser.match_word("by") else None
        # window_size и подобные аргументы не используются
        self._parse_named_arguments(parser)

        body, _ = parse_body(context, self.parse_next_node, {"endpaginate"})
        return PaginateNode(collection=collection, body=body, page_size=page_size)

    def _parse_style(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        body, _ = parse_body(context, self.parse_next_node, {"endstyle"})
        return StyleNode(body=body)

    def _parse_capture(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        name = self._name_argument(header)
        body, _ = parse_body(context, self.parse_next_node, {"endcapture"})
        return CaptureNode(name=name, body=body)

    def _parse_tablerow(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        variable = parser.expect_identifier()
        if not parser.match_word("in"):
            raise ExpressionError(f"Expected 'in' after '{variable}'", parser.current().position)
        collection = parser.parse_primary()
        options = dict(self._parse_named_arguments(parser))

        body, _ = parse_body(context, self.parse_next_node, {"endtablerow"})
        return TablerowNode(
            variable=variable,
            collection=collection,
            body=body,
            cols=options.get("cols"),
            limit=options.get("limit"),
            offset=options.get("offset"),
        )

    # ---- прочие теги ----

    def _parse_layout(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        name = self._name_argument(header)
        return LayoutNode(name=None if name == "none" else name)

    def _parse_content_for(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        name = static_name(parser.parse_primary())
        if name is None:
            raise ExpressionError("content_for expects a name", 0)
        return ContentForNode(name=name, arguments=self._parse_named_arguments(parser))

    def _parse_cycle(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        group = None
        first = parser.parse_primary()
        if parser.match_symbol(":"):
            group = first
            first = parser.parse_primary()

        values = [first]
        while parser.match_symbol(","):
            values.append(parser.parse_primary())
        parser.expect_end()

        # Безымянная группа определяется самим списком значений
        key = ",".join(str(value) for value in values)
        return CycleNode(values=values, group=group, key=key)

    # ---- вспомогательные методы ----

    def _name_argument(self, header: TagHeader) -> str:
        """Единственный аргумент-имя: 'name' или name."""
        parser = ExpressionParser()
        parser.reset(header.markup)

        name = static_name(parser.parse_primary())
        parser.expect_end()
        if not name:
            raise ExpressionError(f"'{header.name}' expects a name", 0)
        return name

    def _parse_named_arguments(self, parser: ExpressionParser) -> List[NamedArgument]:
        """Разбирает оставшиеся аргументы key: value, разделённые запятыми."""
        arguments: List[NamedArgument] = []
        while not parser.is_at_end():
            if parser.match_symbol(","):
                continue
            if not parser.check_named_argument():
                parser.expect_end()
            arguments.append(parser.parse_named_argument())
        return arguments


def get_shopify_parser_rules(parse_next_node: ParseNextNodeFunc) -> List[ParsingRule]:
    """
    Возвращает правила парсинга тегов темы.

    Args:
        parse_next_node: Функтор для рекурсивного парсинга

    Returns:
        Список правил парсинга с привязанными функторами
    """
    rules_instance = ShopifyParserRules(parse_next_node)

    return [
        ParsingRule(
            name="theme_tag",
            priority=PluginPriority.TAG,
            parser_func=rules_instance.parse_theme_tag,
            tags=frozenset(rules_instance.tag_names),
        ),
    ]


__all__ = ["ShopifyParserRules", "get_shopify_parser_rules", "static_name"]
