"""
Правила обработки узлов разметки.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from .nodes import OutputNode, UnknownTagNode
from ..handlers import TemplateProcessorHandlers
from ..types import ProcessorRule, ProcessingContext
from ...values import to_str

logger = logging.getLogger(__name__)


class MarkupProcessorRules:
    """Обработка вывода выражений и нераспознанных тегов."""

    def __init__(self, handlers: Callable[[], TemplateProcessorHandlers]):
        # Обработчики ядра устанавливаются после регистрации плагина
        self._handlers = handlers

    @property
    def handlers(self) -> TemplateProcessorHandlers:
        return self._handlers()

    def process_output(self, processing_context: ProcessingContext) -> str:
        """Вычисляет выражение и приводит результат к строке."""
        node = processing_context.get_node()
        if not isinstance(node, OutputNode):
            raise RuntimeError(f"Expected OutputNode, got {type(node)}")

        value = self.handlers.evaluate(node.expression, processing_context.render)
        return to_str(value)

    def process_unknown(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, UnknownTagNode):
            raise RuntimeError(f"Expected UnknownTagNode, got {type(node)}")

        logger.warning(
            f"Skipped tag '{node.name}' in '{processing_context.render.template_name}': {node.reason}"
        )
        return ""


def get_markup_processor_rules(handlers: Callable[[], TemplateProcessorHandlers]) -> List[ProcessorRule]:
    """
    Возвращает правила обработки узлов разметки.

    Args:
        handlers: Функтор, возвращающий обработчики ядра шаблонизатора

    Returns:
        Список правил обработки
    """
    rules_instance = MarkupProcessorRules(handlers)

    return [
        ProcessorRule(node_type=OutputNode, processor_func=rules_instance.process_output),
        ProcessorRule(node_type=UnknownTagNode, processor_func=rules_instance.process_unknown),
    ]


__all__ = ["MarkupProcessorRules", "get_markup_processor_rules"]
