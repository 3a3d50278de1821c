"""
Парсер выражений шаблона с рекурсивным спуском.

Строит AST выражения из последовательности токенов. Используется как для
содержимого {{ ... }}, так и для аргументов тегов (if, for, render, ...).

Грамматика:
output       → primary filter*
filter       → "|" IDENTIFIER (":" argument ("," argument)*)?
argument     → IDENTIFIER ":" primary | primary
condition    → comparison (("and" | "or") condition)?
comparison   → primary (COMPARATOR | "contains") primary | primary
primary      → STRING | NUMBER | "true" | "false" | "nil" | "null"
             | "empty" | "blank" | range | path
range        → "(" primary ".." primary ")"
path         → (IDENTIFIER | "[" primary "]") ("." (IDENTIFIER | NUMBER) | "[" primary "]")*

Связки and/or правоассоциативны: a and b or c ≡ a and (b or c).
"""

from __future__ import annotations

from typing import List, Tuple

from .lexer import ExpressionError, ExpressionLexer, Token
from .model import (
    Comparison,
    Expression,
    FilterCall,
    FilteredExpression,
    Literal,
    Logical,
    PathSegment,
    RangeExpression,
    SpecialLiteral,
    VariablePath,
)

# Идентификаторы, являющиеся литералами
_LITERAL_WORDS = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
}

_SPECIAL_WORDS = {"empty", "blank"}


class ExpressionParser:
    """
    Парсер выражений с рекурсивным спуском.

    Помимо разбора целых выражений (parse_output, parse_condition) предоставляет
    курсорный API (reset, match_*, parse_primary), которым пользуются правила
    парсинга тегов с нестандартным синтаксисом аргументов.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    # ---- Разбор целых выражений ----

    def parse_output(self, text: str) -> Expression:
        """
        Парсит выражение вывода: значение с цепочкой фильтров.

        Args:
            text: Содержимое {{ ... }} или правая часть assign

        Returns:
            Корневой узел AST

        Raises:
            ExpressionError: При синтаксической ошибке
        """
        self.reset(text)
        if self.is_at_end():
            return Literal(None)
        result = self.parse_filtered()
        self.expect_end()
        return result

    def parse_condition(self, text: str) -> Expression:
        """
        Парсит условие (if, elsif, unless).

        Raises:
            ExpressionError: При синтаксической ошибке или пустом условии
        """
        self.reset(text)
        if self.is_at_end():
            raise ExpressionError("Empty condition", 0)
        result = self.parse_logical()
        self.expect_end()
        return result

    # ---- Курсорный API ----

    def reset(self, text: str) -> None:
        """Токенизирует новую строку и ставит курсор в начало."""
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

    def current(self) -> Token:
        """Возвращает текущий токен."""
        return self._tokens[self._position]

    def is_at_end(self) -> bool:
        """Проверяет, достигнут ли конец токенов."""
        return self.current().type == 'EOF'

    def expect_end(self) -> None:
        """Убеждается, что все токены потреблены."""
        if not self.is_at_end():
            current = self.current()
            raise ExpressionError(f"Unexpected token '{current.value}'", current.position)

    def check_symbol(self, symbol: str) -> bool:
        """Проверяет, является ли текущий токен указанным символом."""
        token = self.current()
        return token.type == 'SYMBOL' and token.value == symbol

    def match_symbol(self, symbol: str) -> bool:
        """Потребляет символ, если он текущий."""
        if self.check_symbol(symbol):
            self._advance()
            return True
        return False

    def expect_symbol(self, symbol: str) -> None:
        """Потребляет обязательный символ."""
        if not self.match_symbol(symbol):
            current = self.current()
            raise ExpressionError(f"Expected '{symbol}', got '{current.value}'", current.position)

    def check_word(self, word: str) -> bool:
        """Проверяет, является ли текущий токен указанным словом."""
        token = self.current()
        return token.type in ('IDENTIFIER', 'KEYWORD') and token.value == word

    def match_word(self, word: str) -> bool:
        """Потребляет слово, если оно текущее."""
        if self.check_word(word):
            self._advance()
            return True
        return False

    def expect_identifier(self) -> str:
        """Потребляет идентификатор и возвращает его."""
        token = self.current()
        if token.type != 'IDENTIFIER':
            raise ExpressionError(f"Expected identifier, got '{token.value}'", token.position)
        self._advance()
        return token.value

    def check_named_argument(self) -> bool:
        """Проверяет, начинается ли с текущей позиции аргумент вида name: value."""
        token = self.current()
        if token.type not in ('IDENTIFIER', 'KEYWORD'):
            return False
        following = self._peek(1)
        return following.type == 'SYMBOL' and following.value == ':'

    def parse_named_argument(self) -> Tuple[str, Expression]:
        """Парсит аргумент вида name: value."""
        name = self.current().value
        self._advance()
        self.expect_symbol(':')
        return name, self.parse_primary()

    # ---- Грамматика ----

    def parse_filtered(self) -> Expression:
        """Парсит значение с необязательной цепочкой фильтров."""
        base = self.parse_primary()
        filters: List[FilterCall] = []
        while self.match_symbol('|'):
            filters.append(self._parse_filter())
        if not filters:
            return base
        return FilteredExpression(base=base, filters=tuple(filters))

    def _parse_filter(self) -> FilterCall:
        """Парсит один вызов фильтра после '|'."""
        token = self.current()
        if token.type not in ('IDENTIFIER', 'KEYWORD'):
            raise ExpressionError(f"Expected filter name, got '{token.value}'", token.position)
        self._advance()

        args: List[Expression] = []
        kwargs: List[Tuple[str, Expression]] = []
        if self.match_symbol(':'):
            while True:
                if self.check_named_argument():
                    kwargs.append(self.parse_named_argument())
                else:
                    args.append(self.parse_primary())
                if not self.match_symbol(','):
                    break

        return FilterCall(name=token.value, args=tuple(args), kwargs=tuple(kwargs))

    def parse_logical(self) -> Expression:
        """Парсит условие со связками and/or (правая ассоциативность)."""
        left = self.parse_comparison()

        for operator in ('and', 'or'):
            if self.match_word(operator):
                right = self.parse_logical()
                return Logical(operator=operator, left=left, right=right)

        return left

    def parse_comparison(self) -> Expression:
        """Парсит сравнение или одиночное значение."""
        left = self.parse_primary()

        token = self.current()
        if token.type == 'COMPARATOR' or (token.type == 'KEYWORD' and token.value == 'contains'):
            self._advance()
            right = self.parse_primary()
            operator = '!=' if token.value == '<>' else token.value
            return Comparison(operator=operator, left=left, right=right)

        return left

    def parse_primary(self) -> Expression:
        """Парсит первичное выражение: литерал, диапазон или путь."""
        token = self.current()

        if token.type == 'STRING':
            self._advance()
            return Literal(token.value)

        if token.type == 'NUMBER':
            self._advance()
            if '.' in token.value:
                return Literal(float(token.value))
            return Literal(int(token.value))

        if self.check_symbol('('):
            return self._parse_range()

        if token.type == 'IDENTIFIER':
            if token.value in _LITERAL_WORDS and not self._path_follows():
                self._advance()
                return Literal(_LITERAL_WORDS[token.value])
            if token.value in _SPECIAL_WORDS and not self._path_follows():
                self._advance()
                return SpecialLiteral(token.value)
            return self._parse_path()

        if self.check_symbol('['):
            return self._parse_path()

        raise ExpressionError(f"Unexpected token '{token.value}'", token.position)

    def _parse_range(self) -> RangeExpression:
        """Парсит диапазон (start..end)."""
        self.expect_symbol('(')
        start = self.parse_primary()
        self.expect_symbol('..')
        end = self.parse_primary()
        self.expect_symbol(')')
        return RangeExpression(start=start, end=end)

    def _parse_path(self) -> VariablePath:
        """Парсит путь к переменной с доступом через точку и индекс."""
        name = ""
        segments: List[PathSegment] = []

        if self.current().type == 'IDENTIFIER':
            name = self.current().value
            self._advance()
        else:
            self.expect_symbol('[')
            segments.append(self.parse_primary())
            self.expect_symbol(']')

        while True:
            if self.match_symbol('.'):
                token = self.current()
                if token.type in ('IDENTIFIER', 'KEYWORD'):
                    segments.append(token.value)
                elif token.type == 'NUMBER':
                    segments.append(Literal(int(token.value)))
                else:
                    raise ExpressionError(f"Expected property name, got '{token.value}'", token.position)
                self._advance()
            elif self.match_symbol('['):
                segments.append(self.parse_primary())
                self.expect_symbol(']')
            else:
                break

        return VariablePath(name=name, segments=tuple(segments))

    # ---- Вспомогательные методы ----

    def _path_follows(self) -> bool:
        """Проверяет, продолжается ли путь после текущего идентификатора."""
        following = self._peek(1)
        return following.type == 'SYMBOL' and following.value in ('.', '[')

    def _peek(self, offset: int) -> Token:
        index = min(self._position + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self.current()
        if not self.is_at_end():
            self._position += 1
        return token


def parse_output(text: str) -> Expression:
    """Удобная функция для разбора выражения вывода."""
    return ExpressionParser().parse_output(text)


def parse_condition(text: str) -> Expression:
    """Удобная функция для разбора условия."""
    return ExpressionParser().parse_condition(text)


__all__ = [
    "ExpressionError",
    "ExpressionParser",
    "parse_output",
    "parse_condition",
]
