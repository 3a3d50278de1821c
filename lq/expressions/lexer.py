"""
Лексер для разбора выражений шаблона.

Выполняет токенизацию содержимого {{ ... }} и аргументов тегов,
разбивая его на значимые элементы:
- Строки в одинарных и двойных кавычках
- Числа (целые и дробные, со знаком)
- Идентификаторы и ключевые слова (and, or, contains)
- Операторы сравнения и символы (. .. | : , [ ] ( ) =)
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


class ExpressionError(ValueError):
    """Ошибка разбора выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Expression error at position {position}: {message}")


@dataclass
class Token:
    """
    Токен выражения.

    Attributes:
        type: Тип токена (STRING, NUMBER, IDENTIFIER, KEYWORD, COMPARATOR, SYMBOL, EOF)
        value: Значение токена (для строк без кавычек)
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Лексер для разбиения выражения на токены.

    Поддерживаемые токены:
    - STRING: 'text' или "text"
    - NUMBER: 42, -1, 3.14
    - IDENTIFIER: имена переменных, фильтров, ключей (допускают дефис и ?)
    - KEYWORD: and, or, contains
    - COMPARATOR: == != <> <= >= < >
    - SYMBOL: .. . | : , [ ] ( ) =
    - EOF: конец строки
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        # Пробелы и переводы строк (игнорируем)
        (r'\s+', 'WHITESPACE', True),

        # Строковые литералы
        (r"'[^']*'", 'STRING', False),
        (r'"[^"]*"', 'STRING', False),

        # Числа: дробная часть только если за точкой идёт цифра (1..5 задаёт диапазон)
        (r'-?\d+\.\d+', 'NUMBER', False),
        (r'-?\d+', 'NUMBER', False),

        # Операторы сравнения (проверяем перед одиночными символами)
        (r'==|!=|<>|<=|>=|<|>', 'COMPARATOR', False),

        # Символы
        (r'\.\.', 'SYMBOL', False),
        (r'[.|:,\[\]()=]', 'SYMBOL', False),

        # Идентификаторы; ключевые слова определяются после захвата
        (r'[A-Za-z_][\w-]*\??', 'IDENTIFIER', False),

        # Неизвестный символ (ошибка)
        (r'.', 'UNKNOWN', False),
    ]

    # Ключевые слова для постпроцессинга
    KEYWORDS = {
        'and', 'or', 'contains'
    }

    def __init__(self):
        # Компилируем регулярные выражения для лучшей производительности
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Args:
            text: Выражение для разбора

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ExpressionError: При обнаружении неизвестного символа
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise ExpressionError(f"Unexpected character '{value}'", position)

                    final_type = token_type
                    if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                        final_type = 'KEYWORD'
                    elif token_type == 'STRING':
                        value = value[1:-1]

                    tokens.append(Token(type=final_type, value=value, position=position))

                position = match.end()
                break

        # Добавляем EOF токен
        tokens.append(Token(type='EOF', value='', position=position))

        return tokens


__all__ = ["ExpressionError", "Token", "ExpressionLexer"]
