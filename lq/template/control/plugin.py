"""
Плагин управляющих тегов Liquid.

Регистрирует правила парсинга и обработчики для условий, циклов,
присваиваний и блоков без разбора.
"""

from __future__ import annotations

from typing import List

from .parser_rules import get_control_parser_rules
from .processor_rules import get_control_processor_rules
from ..base import TemplatePlugin
from ..nodes import TemplateAST
from ..types import PluginPriority, ParsingRule, ProcessorRule


class ControlFlowPlugin(TemplatePlugin):
    """
    Плагин управляющих конструкций.

    Обеспечивает функциональность:
    - {% if %}/{% elsif %}/{% else %}, {% unless %}, {% case %}/{% when %}
    - {% for item in coll limit:N offset:N reversed %} с {% else %}, break, continue
    - {% assign %}, {% echo %}, {% liquid %}
    - {% raw %}, {% comment %}, {% # ... %}
    """

    @property
    def name(self) -> str:
        """Возвращает имя плагина."""
        return "control"

    @property
    def priority(self) -> PluginPriority:
        """Возвращает приоритет плагина."""
        return PluginPriority.TAG

    def register_parser_rules(self) -> List[ParsingRule]:
        """Регистрирует правила парсинга управляющих тегов."""
        return get_control_parser_rules(self._parse_next_node, self._parse_source)

    def register_processors(self) -> List[ProcessorRule]:
        """Регистрирует обработчики узлов (обработчики ядра доступны после initialize)."""
        return get_control_processor_rules(lambda: self.handlers)

    def _parse_source(self, text: str, template_name: str) -> TemplateAST:
        return self.handlers.parse_source(text, template_name)


__all__ = ["ControlFlowPlugin"]
