"""
Типы, которыми обмениваются плагины и ядро шаблонизатора.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from re import Pattern
from typing import Callable, Dict, FrozenSet, List, Optional, Set, Tuple, Type

from .context import RenderContext
from .nodes import TemplateNode
from .tokens import Token, TokenType, TokenTypeName, ParserError

logger = logging.getLogger(__name__)


class PluginPriority(enum.IntEnum):
    """Порядок применения правил парсинга: больше - раньше."""
    TAG = 100            # {% ... %}
    OUTPUT = 90          # {{ ... }}
    FALLBACK = 20        # нераспознанные теги и вывод
    TEXT = 10


class WhitespaceStrip(enum.Enum):
    """Сторона, с которой разделитель с дефисом срезает пробельные символы."""
    NONE = "none"
    BEFORE = "before"    # {{- / {%-
    AFTER = "after"      # -}} / -%}


@dataclass
class TokenSpec:
    name: str
    pattern: Pattern[str]
    priority: int = 50
    strip: WhitespaceStrip = WhitespaceStrip.NONE


@dataclass
class TokenContext:
    """
    Область лексера между открывающим и закрывающим токенами.

    Внутри неё распознаются только close_tokens и inner_tokens
    (и открывающие токены других областей, если allow_nesting).
    """
    name: str
    open_tokens: Set[str]
    close_tokens: Set[str]
    inner_tokens: Set[str] = field(default_factory=set)
    allow_nesting: bool = False

    def __post_init__(self):
        if not self.name:
            raise ValueError("Token context name cannot be empty")
        if not self.open_tokens or not self.close_tokens:
            raise ValueError(f"Token context '{self.name}' needs open and close tokens")
        if self.open_tokens & self.close_tokens:
            logger.warning(f"Token context '{self.name}' opens and closes with {self.open_tokens & self.close_tokens}")


@dataclass
class ParsingRule:
    """
    Правило парсинга.

    parser_func возвращает узел или None, если конструкция в позиции
    курсора ему не принадлежит; исключение означает, что конструкция
    его, но записана неверно.
    """
    name: str
    priority: int
    parser_func: Callable[[ParsingContext], Optional[TemplateNode]]
    enabled: bool = True
    tags: FrozenSet[str] = frozenset()  # Имена тегов, которые разбирает правило


@dataclass
class ProcessingContext:
    """Узел в составе своего AST и проход, в котором он рендерится."""
    ast: List[TemplateNode]
    node_index: int
    render: RenderContext

    def get_node(self) -> TemplateNode:
        return self.ast[self.node_index]


@dataclass
class ProcessorRule:
    node_type: Type[TemplateNode]
    processor_func: Callable[[ProcessingContext], str]


class ParsingContext:
    """
    Курсор парсера по списку токенов одного шаблона.

    За концом списка current() и peek() возвращают EOF.
    """

    def __init__(self, tokens: List[Token], template_name: str = "", known_tags: FrozenSet[str] = frozenset()):
        self.tokens = tokens
        self.position = 0
        self.length = len(tokens)
        self.template_name = template_name

        # Теги, объявленные плагинами
        self.known_tags = known_tags

        # Ошибка последнего упавшего правила, для запасного правила
        self.last_error: Optional[Exception] = None

        # (правило, позиция) -> ошибка; результат правила зависит только от токенов с позиции
        self.failed_rules: Dict[Tuple[str, int], Exception] = {}

    def _at(self, index: int) -> Token:
        if index >= self.length:
            return Token(TokenType.EOF.value, "", index, 0, 0)
        return self.tokens[index]

    def current(self) -> Token:
        return self._at(self.position)

    def peek(self, offset: int = 1) -> Token:
        return self._at(self.position + offset)

    def advance(self) -> Token:
        token = self.current()
        if self.position < self.length:
            self.position += 1
        return token

    def is_at_end(self) -> bool:
        return self.current().type == TokenType.EOF.value

    def match(self, *token_types: TokenTypeName) -> bool:
        return self.current().type in token_types

    def consume(self, expected_type: TokenTypeName) -> Token:
        """
        Raises:
            ParserError: Текущий токен другого типа
        """
        if self.current().type != expected_type:
            raise ParserError(f"Expected {expected_type}, got {self.current().type}", self.current())
        return self.advance()


TokenRegistry = Dict[str, TokenSpec]
ParserRulesRegistry = Dict[str, ParsingRule]
ProcessorRegistry = Dict[Type[TemplateNode], List[ProcessorRule]]


__all__ = [
    "PluginPriority",
    "WhitespaceStrip",
    "TokenSpec",
    "TokenContext",
    "ParsingRule",
    "ProcessingContext",
    "ProcessorRule",
    "ParsingContext",
    "TokenRegistry",
    "ParserRulesRegistry",
    "ProcessorRegistry",
    "ParserError",
]
