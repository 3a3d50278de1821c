"""
Лексер шаблонов Liquid.

Набор токенов задают плагины через реестр. Вне разделителей распознаются
только текст и открывающие токены контекстов ({{, {%); внутри контекста
только его содержимое и закрывающий токен, поэтому "}}" в обычном тексте
и "{{" внутри тега остаются содержимым.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional, TYPE_CHECKING

from .tokens import Token, TokenType, TokenTypeName
from .types import TokenSpec, TokenContext, WhitespaceStrip

if TYPE_CHECKING:
    from .registry import TemplateRegistry

logger = logging.getLogger(__name__)


class _Cursor:
    """Позиция в исходном тексте со строкой и колонкой."""

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def match(self, specs: List[TokenSpec]) -> Optional[Token]:
        for spec in specs:
            m = spec.pattern.match(self.text, self.position)
            if m and m.end() > self.position:
                return self._emit(spec.name, m.end())
        return None

    def take_text(self, specs: List[TokenSpec]) -> Token:
        """Текст до позиции, где может начаться любой не-текстовый токен (минимум символ)."""
        special = [spec for spec in specs if spec.name != TokenType.TEXT.value]
        end = self.position + 1
        while end < len(self.text) and not any(_matches_at(spec, self.text, end) for spec in special):
            end += 1
        return self._emit(TokenType.TEXT.value, end)

    def eof(self) -> Token:
        return Token(TokenType.EOF.value, "", self.position, self.line, self.column)

    def _emit(self, token_type: TokenTypeName, end: int) -> Token:
        value = self.text[self.position:end]
        token = Token(token_type, value, self.position, self.line, self.column)

        newlines = value.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(value) - value.rfind("\n")
        else:
            self.column += len(value)
        self.position = end

        return token


def _matches_at(spec: TokenSpec, text: str, position: int) -> bool:
    m = spec.pattern.match(text, position)
    return bool(m) and m.end() > position


class ContextualLexer:
    """
    Лексер со стеком контекстов разделителей.

    Таблицы токенов строятся из реестра на каждый вызов tokenize(),
    так что плагин, зарегистрированный позже, учитывается сразу.
    """

    def __init__(self, registry: "TemplateRegistry"):
        self.registry = registry

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает текст на токены; последний токен всегда EOF.

        Дефис у разделителя срезает пробельные символы соседнего текста.
        """
        contexts = self.registry.get_all_token_contexts()
        ordered = self.registry.get_tokens_by_priority()

        openers: Dict[str, TokenContext] = {name: ctx for ctx in contexts for name in ctx.open_tokens}
        outside = [spec for spec in ordered if spec.name == TokenType.TEXT.value or spec.name in openers]
        inside = {ctx.name: self._context_specs(ctx, contexts, ordered) for ctx in contexts}

        cursor = _Cursor(text)
        stack: List[TokenContext] = []
        tokens: List[Token] = []

        while not cursor.at_end():
            specs = inside[stack[-1].name] if stack else outside
            token = cursor.match(specs) or cursor.take_text(specs)
            tokens.append(token)

            if stack and token.type in stack[-1].close_tokens:
                stack.pop()
            elif token.type in openers:
                stack.append(openers[token.type])

        tokens = self._strip_whitespace(tokens)
        tokens.append(cursor.eof())

        if stack:
            logger.debug(f"Unterminated '{stack[-1].name}' at end of template")
        logger.debug(f"Tokenized {len(text)} chars into {len(tokens)} tokens")
        return tokens

    @staticmethod
    def _context_specs(context: TokenContext, contexts: List[TokenContext], ordered: List[TokenSpec]) -> List[TokenSpec]:
        names = set(context.close_tokens) | set(context.inner_tokens)
        if context.allow_nesting:
            for other in contexts:
                if other.name != context.name:
                    names.update(other.open_tokens)
        return [spec for spec in ordered if spec.name in names]

    def _strip_whitespace(self, tokens: List[Token]) -> List[Token]:
        """{{- и {%- срезают конец предыдущего текста, -}} и -%} начало следующего."""
        result = list(tokens)
        for index, token in enumerate(tokens):
            spec = self.registry.get_token_spec(token.type)
            if spec is None or spec.strip == WhitespaceStrip.NONE or "-" not in token.value:
                continue

            neighbour_index = index - 1 if spec.strip == WhitespaceStrip.BEFORE else index + 1
            if not 0 <= neighbour_index < len(result):
                continue
            neighbour = result[neighbour_index]
            if neighbour.type != TokenType.TEXT.value:
                continue

            stripped = neighbour.value.rstrip() if spec.strip == WhitespaceStrip.BEFORE else neighbour.value.lstrip()
            result[neighbour_index] = replace(neighbour, value=stripped)

        return [token for token in result if token.value]


__all__ = ["ContextualLexer"]
