"""
Реестр плагинов шаблонизатора Liquid.

Собирает токены разделителей, правила парсинга и обработчики узлов,
а также закрытую таблицу имён тегов: каждый тег принадлежит ровно
одному плагину.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, FrozenSet, List, Optional, Type

from .base import TemplatePlugin, PluginList
from .handlers import TemplateProcessorHandlers
from .nodes import TemplateNode
from .tokens import TokenType
from .types import TokenSpec, ParsingRule, ProcessorRule, TokenRegistry, ParserRulesRegistry, \
    ProcessorRegistry, TokenContext

logger = logging.getLogger(__name__)

# Текст до ближайшего {{ или {%; одиночная { остаётся текстом
_TEXT_PATTERN = re.compile(r'(?:\{(?![{%])|[^{])+')


class TemplateRegistry:
    """
    Реестр компонентов, общий для всех проходов одного движка.

    После initialize_plugins() только читается.
    """

    def __init__(self):
        self.tokens: TokenRegistry = {
            TokenType.TEXT.value: TokenSpec(name=TokenType.TEXT.value, pattern=_TEXT_PATTERN, priority=1),
        }
        self.token_contexts: Dict[str, TokenContext] = {}
        self.parser_rules: ParserRulesRegistry = {}
        self.processors: ProcessorRegistry = {}

        # Имя тега -> имя плагина-владельца
        self.tag_owners: Dict[str, str] = {}

        self.plugins: PluginList = []
        self._plugins_initialized = False

    def register_plugin(self, plugin: TemplatePlugin) -> None:
        """
        Регистрирует плагин со всеми его компонентами.

        Raises:
            ValueError: Плагин с таким именем уже есть, либо его тег
                уже принадлежит другому плагину
        """
        if any(p.name == plugin.name for p in self.plugins):
            raise ValueError(f"Plugin '{plugin.name}' already registered")

        rules = plugin.register_parser_rules()
        self._claim_tags(plugin.name, rules)

        self.plugins.append(plugin)

        for spec in plugin.register_tokens():
            if spec.name in self.tokens:
                logger.warning(f"Token '{spec.name}' from plugin '{plugin.name}' overwrites existing token")
            self.tokens[spec.name] = spec

        for context in plugin.register_token_contexts():
            self.token_contexts[context.name] = context

        for rule in rules:
            if rule.name in self.parser_rules:
                logger.warning(f"Parser rule '{rule.name}' from plugin '{plugin.name}' overwrites existing rule")
            self.parser_rules[rule.name] = rule

        for processor_rule in plugin.register_processors():
            self.processors.setdefault(processor_rule.node_type, []).append(processor_rule)

        logger.debug(f"Registered plugin '{plugin.name}' ({sum(len(r.tags) for r in rules)} tags)")

    def _claim_tags(self, plugin_name: str, rules: List[ParsingRule]) -> None:
        """Таблица тегов закрыта: повторное объявление тега - ошибка конфигурации."""
        claimed: Dict[str, str] = {}
        for rule in rules:
            for tag in rule.tags:
                owner = self.tag_owners.get(tag) or claimed.get(tag)
                if owner is not None and owner != plugin_name:
                    raise ValueError(f"Tag '{tag}' from plugin '{plugin_name}' is already provided by '{owner}'")
                claimed[tag] = plugin_name
        self.tag_owners.update(claimed)

    def initialize_plugins(self, handlers: TemplateProcessorHandlers) -> None:
        """
        Передаёт плагинам обработчики ядра и завершает их настройку.

        Повторный вызов ничего не делает.
        """
        if self._plugins_initialized:
            return

        ordered = sorted(self.plugins, key=lambda p: p.priority, reverse=True)
        for plugin in ordered:
            plugin.set_handlers(handlers)
        for plugin in ordered:
            plugin.initialize()

        self._plugins_initialized = True

    # ---- запросы ----

    def known_tags(self) -> FrozenSet[str]:
        return frozenset(self.tag_owners)

    def tag_owner(self, tag: str) -> Optional[str]:
        return self.tag_owners.get(tag)

    def get_sorted_parser_rules(self) -> List[ParsingRule]:
        """Включённые правила парсинга, старшие по приоритету первыми."""
        active = [rule for rule in self.parser_rules.values() if rule.enabled]
        return sorted(active, key=lambda r: r.priority, reverse=True)

    def get_processors_for_node(self, node_type: Type[TemplateNode]) -> List[ProcessorRule]:
        return self.processors.get(node_type, [])

    def get_token_spec(self, name: str) -> Optional[TokenSpec]:
        return self.tokens.get(name)

    def get_tokens_by_priority(self) -> List[TokenSpec]:
        """Спецификации токенов; большее priority проверяется раньше."""
        return sorted(self.tokens.values(), key=lambda spec: spec.priority, reverse=True)

    def get_all_token_contexts(self) -> List[TokenContext]:
        return list(self.token_contexts.values())


__all__ = ["TemplateRegistry"]
