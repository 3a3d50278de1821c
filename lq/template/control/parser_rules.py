"""
Правила парсинга управляющих тегов.

Обрабатывает условия if/elsif/else/unless, case/when, циклы for
с break/continue, присваивания, echo, многострочный liquid,
а также raw и comment с отслеживанием вложенности.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .nodes import (
    AssignNode,
    BreakNode,
    CaseNode,
    CommentNode,
    ConditionalBranch,
    ContinueNode,
    ForNode,
    IfNode,
    LiquidNode,
    RawNode,
    UnlessNode,
    WhenClause,
)
from ..markup.nodes import OutputNode
from ..nodes import TemplateAST, TemplateNode
from ..tags import ParseNextNodeFunc, TagHeader, capture_raw, parse_body, peek_tag, read_tag
from ..types import PluginPriority, ParsingRule, ParsingContext
from ...expressions import Expression, ExpressionError, ExpressionParser, parse_condition, parse_output

# Тип функтора для разбора вложенного исходного текста (тег liquid)
ParseSourceFunc = Callable[[str, str], TemplateAST]

TagParser = Callable[[TagHeader, ParsingContext], TemplateNode]


class ControlParserRules:
    """
    Класс правил парсинга управляющих тегов.

    Инкапсулирует все правила парсинга с доступом к функтору
    рекурсивного парсинга через состояние экземпляра.
    """

    def __init__(self, parse_next_node: ParseNextNodeFunc, parse_source: ParseSourceFunc):
        """
        Инициализирует правила парсинга.

        Args:
            parse_next_node: Функтор для рекурсивного парсинга следующего узла
            parse_source: Функтор для разбора тела тега liquid
        """
        self.parse_next_node = parse_next_node
        self.parse_source = parse_source

        # Закрытая таблица тегов плагина, разрешается один раз при парсинге
        self._tags: Dict[str, TagParser] = {
            "if": self._parse_if,
            "unless": self._parse_unless,
            "case": self._parse_case,
            "for": self._parse_for,
            "break": lambda header, context: BreakNode(),
            "continue": lambda header, context: ContinueNode(),
            "assign": self._parse_assign,
            "echo": self._parse_echo,
            "liquid": self._parse_liquid,
            "raw": self._parse_raw,
            "comment": self._parse_comment,
            "#": lambda header, context: CommentNode(text=header.markup),
        }

    @property
    def tag_names(self) -> List[str]:
        return list(self._tags)

    def parse_control_tag(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Парсит управляющий тег {% name ... %}.

        Возвращает None для тегов других плагинов.
        """
        header = peek_tag(context)
        if header is None or header.name not in self._tags:
            return None

        read_tag(context)
        return self._tags[header.name](header, context)

    # ---- условия ----

    def _parse_if(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        branches, else_body = self._parse_branches(header, context, "endif")
        return IfNode(branches=branches, else_body=else_body)

    def _parse_unless(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        branches, else_body = self._parse_branches(header, context, "endunless")
        return UnlessNode(branches=branches, else_body=else_body)

    def _parse_branches(self, header: TagHeader, context: ParsingContext, end_name: str):
        """Парсит цепочку веток if/elsif/else до end_name."""
        branches: List[ConditionalBranch] = []
        condition = parse_condition(header.markup)

        while True:
            body, stop = parse_body(context, self.parse_next_node, {"elsif", "else", end_name})
            branches.append(ConditionalBranch(condition=condition, body=body))

            if stop.name == "elsif":
                condition = parse_condition(stop.markup)
                continue

            if stop.name == "else":
                else_body, _ = parse_body(context, self.parse_next_node, {end_name})
                return branches, else_body

            return branches, None

    def _parse_case(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        subject = parse_output(header.markup)

        # Содержимое до первого when не выводится
        _, stop = parse_body(context, self.parse_next_node, {"when", "else", "endcase"})

        whens: List[WhenClause] = []
        else_body = None
        while stop.name != "endcase":
            if stop.name == "when":
                values = self._parse_when_values(stop)
                body, stop = parse_body(context, self.parse_next_node, {"when", "else", "endcase"})
                whens.append(WhenClause(values=values, body=body))
            else:
                else_body, stop = parse_body(context, self.parse_next_node, {"endcase"})

        return CaseNode(subject=subject, whens=whens, else_body=else_body)

    def _parse_when_values(self, header: TagHeader) -> List[Expression]:
        """Альтернативы when разделяются запятой или словом or."""
        parser = ExpressionParser()
        parser.reset(header.markup)

        values = [parser.parse_primary()]
        while parser.match_symbol(",") or parser.match_word("or"):
            values.append(parser.parse_primary())
        parser.expect_end()
        return values

    # ---- циклы ----

    def _parse_for(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        variable = parser.expect_identifier()
        if not parser.match_word("in"):
            raise ExpressionError(f"Expected 'in' after '{variable}'", parser.current().position)
        collection = parser.parse_primary()

        limit = offset = None
        reverse = False
        while not parser.is_at_end():
            if parser.match_word("reversed"):
                reverse = True
            elif parser.check_named_argument():
                name, value = parser.parse_named_argument()
                if name == "limit":
                    limit = value
                elif name == "offset":
                    offset = value
            elif not parser.match_symbol(","):
                parser.expect_end()

        body, stop = parse_body(context, self.parse_next_node, {"else", "endfor"})
        else_body = None
        if stop.name == "else":
            else_body, _ = parse_body(context, self.parse_next_node, {"endfor"})

        return ForNode(
            variable=variable,
            collection=collection,
            body=body,
            else_body=else_body,
            limit=limit,
            offset=offset,
            reversed=reverse,
        )

    # ---- переменные и вывод ----

    def _parse_assign(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        parser = ExpressionParser()
        parser.reset(header.markup)

        name = parser.expect_identifier()
        parser.expect_symbol("=")
        expression = parser.parse_filtered()
        parser.expect_end()
        return AssignNode(name=name, expression=expression)

    def _parse_echo(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return OutputNode(expression=parse_output(header.markup), markup=header.markup)

    def _parse_liquid(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        """
        Каждая непустая строка становится отдельным тегом, echo становится выводом.
        """
        lines: List[str] = []
        for line in header.markup.splitlines():
            statement = line.strip()
            if not statement:
                continue
            if statement == "echo" or statement.startswith(("echo ", "echo\t")):
                lines.append("{{ " + statement[4:].strip() + " }}")
            else:
                lines.append("{% " + statement + " %}")

        body = self.parse_source("".join(lines), f"{context.template_name}#liquid")
        return LiquidNode(body=body)

    # ---- блоки без разбора ----

    def _parse_raw(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return RawNode(text=capture_raw(context, "raw"))

    def _parse_comment(self, header: TagHeader, context: ParsingContext) -> TemplateNode:
        return CommentNode(text=capture_raw(context, "comment"))


def get_control_parser_rules(
    parse_next_node: ParseNextNodeFunc,
    parse_source: ParseSourceFunc,
) -> List[ParsingRule]:
    """
    Возвращает правила парсинга управляющих тегов.

    Args:
        parse_next_node: Функтор для рекурсивного парсинга
        parse_source: Функтор для разбора тела тега liquid

    Returns:
        Список правил парсинга с привязанными функторами
    """
    rules_instance = ControlParserRules(parse_next_node, parse_source)

    return [
        ParsingRule(
            name="control_tag",
            priority=PluginPriority.TAG,
            parser_func=rules_instance.parse_control_tag,
            tags=frozenset(rules_instance.tag_names),
        ),
    ]


__all__ = ["ControlParserRules", "ParseSourceFunc", "get_control_parser_rules"]
