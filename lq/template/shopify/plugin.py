"""
Плагин тегов темы Shopify.

Регистрирует правила парсинга и обработчики для секций, сниппетов,
форм, пагинации, тегов со стилями и скриптами, а также тегов,
изменяющих состояние прохода (capture, increment, decrement, cycle).
"""

from __future__ import annotations

from typing import List

from .parser_rules import get_shopify_parser_rules
from .processor_rules import get_shopify_processor_rules
from ..base import TemplatePlugin
from ..types import PluginPriority, ParsingRule, ProcessorRule


class ShopifyTagsPlugin(TemplatePlugin):
    """
    Плагин тегов темы.

    Обеспечивает функциональность:
    - {% section %}, {% sections %} - секции и группы секций
    - {% render %} (изолированная область), {% include %} (общая область)
    - {% form %}, {% paginate %}, {% tablerow %}
    - {% schema %}, {% stylesheet %}, {% javascript %}, {% style %}
    - {% layout %}, {% content_for %}
    - {% capture %}, {% increment %}, {% decrement %}, {% cycle %}
    """

    @property
    def name(self) -> str:
        """Возвращает имя плагина."""
        return "shopify"

    @property
    def priority(self) -> PluginPriority:
        """Возвращает приоритет плагина."""
        return PluginPriority.TAG

    def register_parser_rules(self) -> List[ParsingRule]:
        """Регистрирует правила парсинга тегов темы."""
        return get_shopify_parser_rules(self._parse_next_node)

    def register_processors(self) -> List[ProcessorRule]:
        """Регистрирует обработчики узлов (обработчики ядра доступны после initialize)."""
        return get_shopify_processor_rules(lambda: self.handlers)


__all__ = ["ShopifyTagsPlugin"]
