"""
Интерфейс плагина шаблонизатора Liquid.

Плагин объявляет набор тегов (через правила парсинга), узлы AST
и обработчики этих узлов. Процессор собирает плагины в реестре.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .handlers import TemplateProcessorHandlers
from .nodes import TemplateNode
from .types import PluginPriority, TokenSpec, ParsingRule, ParsingContext, ProcessorRule, TokenContext


class TemplatePlugin(ABC):
    """
    Базовый класс плагина.

    Правила парсинга регистрируются до того, как процессор создан,
    поэтому обработчики ядра доступны им только через функторы,
    которые разрешаются на момент вызова.
    """

    def __init__(self):
        self._handlers: Optional[TemplateProcessorHandlers] = None

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def priority(self) -> PluginPriority:
        ...

    def set_handlers(self, handlers: TemplateProcessorHandlers) -> None:
        self._handlers = handlers

    @property
    def handlers(self) -> TemplateProcessorHandlers:
        assert self._handlers is not None, f"Plugin '{self.name}' used before initialization"
        return self._handlers

    def register_tokens(self) -> List[TokenSpec]:
        """Токены лексера; у большинства плагинов своих токенов нет."""
        return []

    def register_token_contexts(self) -> List[TokenContext]:
        return []

    @abstractmethod
    def register_parser_rules(self) -> List[ParsingRule]:
        """
        Правила парсинга плагина.

        Поле tags каждого правила перечисляет теги, которые оно разбирает;
        реестр не допускает одного тега у двух плагинов.
        """

    @abstractmethod
    def register_processors(self) -> List[ProcessorRule]:
        """Обработчики узлов, которые создают правила плагина."""

    def initialize(self) -> None:
        """Вызывается после регистрации всех плагинов."""

    def _parse_next_node(self, context: ParsingContext) -> Optional[TemplateNode]:
        return self.handlers.parse_next_node(context)


PluginList = List[TemplatePlugin]

__all__ = [
    "TemplatePlugin",
    "PluginList",
]
