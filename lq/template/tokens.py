"""
Токены лексера шаблонов.

Ядро знает только TEXT и EOF; разделители {{ }} и {% %} и содержимое
между ними регистрирует плагин разметки.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    TEXT = "TEXT"
    EOF = "EOF"


# Имена типов токенов плагинов - обычные строки
TokenTypeName = str


@dataclass(frozen=True)
class Token:
    """
    Токен исходного текста.

    line и column считаются с 1.
    """
    type: TokenTypeName
    value: str
    position: int
    line: int
    column: int

    @property
    def location(self) -> str:
        return f"{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, {self.location})"


class ParserError(Exception):
    """Правило парсинга не смогло разобрать конструкцию начиная с token."""

    def __init__(self, message: str, token: Token):
        super().__init__(f"{message} at {token.location} (token: {token.type})")
        self.message = message
        self.token = token

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column


__all__ = [
    "TokenType",
    "TokenTypeName",
    "Token",
    "ParserError",
]
