"""
Парсер шаблонов Liquid на правилах плагинов.

Правила пробуются в порядке приоритета с откатом позиции. Правило,
выбросившее исключение, пропускается, а его ошибка достаётся запасному
правилу, которое превращает тег в UnknownTagNode; неудача правила в
позиции запоминается до конца разбора. Токен, который
не разобрало ни одно правило, становится текстом.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .nodes import TemplateNode, TemplateAST, TextNode
from .registry import TemplateRegistry
from .tokens import Token, TokenType
from .types import ParsingContext, ParsingRule

logger = logging.getLogger(__name__)


class ModularParser:

    def __init__(self, registry: TemplateRegistry):
        self.registry = registry
        self._rules: Optional[List[ParsingRule]] = None

    @property
    def rules(self) -> List[ParsingRule]:
        # Реестр заполняется плагинами после создания парсера
        if self._rules is None:
            self._rules = self.registry.get_sorted_parser_rules()
            logger.debug(f"Parser rules: {', '.join(rule.name for rule in self._rules)}")
        return self._rules

    def parse(self, tokens: List[Token], template_name: str = "") -> TemplateAST:
        """
        Строит AST шаблона.

        Args:
            tokens: Токены лексера (с завершающим EOF)
            template_name: Имя шаблона для диагностики
        """
        context = ParsingContext(tokens, template_name, self.registry.known_tags())
        ast: List[TemplateNode] = []

        while not context.is_at_end():
            node = self._parse_next_node(context)
            if node is not None:
                ast.append(node)
            else:
                self._append_text(ast, context.advance(), template_name)

        return ast

    def _parse_next_node(self, context: ParsingContext) -> Optional[TemplateNode]:
        """
        Применяет первое сработавшее правило в текущей позиции.

        Используется и правилами блочных тегов для разбора тела.

        Returns:
            Узел или None (позиция при этом не меняется)
        """
        start = context.position
        context.last_error = None

        for rule in self.rules:
            # Незакрытый блок уже разбирался изнутри объемлющего блока
            known_failure = context.failed_rules.get((rule.name, start))
            if known_failure is not None:
                context.last_error = known_failure
                continue

            context.position = start
            try:
                node = rule.parser_func(context)
            except Exception as e:
                logger.debug(f"Rule '{rule.name}' failed at {context.tokens[start].location if start < context.length else 'EOF'}: {e}")
                context.failed_rules[(rule.name, start)] = e
                context.last_error = e
                continue
            if node is not None:
                return node

        context.position = start
        return None

    @staticmethod
    def _append_text(ast: List[TemplateNode], token: Token, template_name: str) -> None:
        if token.type != TokenType.TEXT.value:
            logger.debug(f"Token {token.type} at {token.location} in '{template_name}' kept as text")

        if ast and isinstance(ast[-1], TextNode):
            ast[-1] = TextNode(text=ast[-1].text + token.value)
        else:
            ast.append(TextNode(text=token.value))


__all__ = ["ModularParser"]
