"""
Правила обработки управляющих тегов.

Вычисляет условия, выполняет циклы с forloop и прерываниями,
пишет результаты assign в область видимости прохода.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from .nodes import (
    AssignNode,
    BreakNode,
    CaseNode,
    CommentNode,
    ContinueNode,
    ForNode,
    IfNode,
    LiquidNode,
    RawNode,
    UnlessNode,
)
from ..context import BreakLoop, ContinueLoop, RenderContext
from ..handlers import TemplateProcessorHandlers
from ..nodes import TemplateNode
from ..types import ProcessorRule, ProcessingContext
from ...scope import for_loop
from ...values import Value, to_int, to_list, values_equal


def slice_collection(items: List[Any], offset: Optional[int], limit: Optional[int]) -> List[Any]:
    """Применяет offset и limit к элементам коллекции."""
    start = max(offset or 0, 0)
    if limit is None:
        return items[start:]
    return items[start:start + max(limit, 0)]


def iterable_items(value: Value) -> List[Any]:
    """Элементы для итерации: словарь даёт пары [ключ, значение], скаляр даёт сам себя."""
    return list(to_list(value))


class ControlProcessorRules:
    """
    Класс правил обработки управляющих тегов.

    Инкапсулирует правила обработки с доступом к обработчикам ядра.
    """

    def __init__(self, handlers: Callable[[], TemplateProcessorHandlers]):
        """
        Инициализирует правила обработки.

        Args:
            handlers: Функтор, возвращающий обработчики ядра (доступны после initialize)
        """
        self._handlers = handlers

    @property
    def handlers(self) -> TemplateProcessorHandlers:
        return self._handlers()

    def process_if(self, processing_context: ProcessingContext) -> str:
        """
        Обрабатывает условный блок {% if %} или {% unless %}.

        Условие первой ветки unless инвертируется.
        """
        node = processing_context.get_node()
        if not isinstance(node, IfNode):
            raise RuntimeError(f"Expected IfNode, got {type(node)}")

        render_ctx = processing_context.render
        negate_first = isinstance(node, UnlessNode)

        for index, branch in enumerate(node.branches):
            result = self.handlers.test(branch.condition, render_ctx)
            if negate_first and index == 0:
                result = not result
            if result:
                return self._render_body(branch.body, render_ctx)

        if node.else_body is not None:
            return self._render_body(node.else_body, render_ctx)

        return ""

    def process_case(self, processing_context: ProcessingContext) -> str:
        """Рендерит первую ветку when, одна из альтернатив которой равна значению case."""
        node = processing_context.get_node()
        if not isinstance(node, CaseNode):
            raise RuntimeError(f"Expected CaseNode, got {type(node)}")

        render_ctx = processing_context.render
        subject = self.handlers.evaluate(node.subject, render_ctx)

        for clause in node.whens:
            for candidate in clause.values:
                if values_equal(subject, self.handlers.evaluate(candidate, render_ctx)):
                    return self._render_body(clause.body, render_ctx)

        if node.else_body is not None:
            return self._render_body(node.else_body, render_ctx)

        return ""

    def process_for(self, processing_context: ProcessingContext) -> str:
        """
        Обрабатывает цикл {% for %}.

        Переменная цикла и forloop живут во фрейме итерации, который
        снимается после неё. break/continue из тела прерывают итерацию,
        сохраняя уже накопленный вывод.
        """
        node = processing_context.get_node()
        if not isinstance(node, ForNode):
            raise RuntimeError(f"Expected ForNode, got {type(node)}")

        render_ctx = processing_context.render
        scope = render_ctx.scope

        items = iterable_items(self.handlers.evaluate(node.collection, render_ctx))
        offset = to_int(self.handlers.evaluate(node.offset, render_ctx)) if node.offset else None
        limit = to_int(self.handlers.evaluate(node.limit, render_ctx)) if node.limit else None
        items = slice_collection(items, offset, limit)
        if node.reversed:
            items.reverse()

        if not items:
            if node.else_body is not None:
                return self._render_body(node.else_body, render_ctx)
            return ""

        parent = scope.resolve("forloop")
        parentloop = parent if isinstance(parent, dict) else None

        result_parts: List[str] = []
        for index, item in enumerate(items):
            frame: Dict[str, Any] = {
                node.variable: item,
                "forloop": for_loop(index, len(items), parentloop),
            }
            with scope.pushed(frame):
                try:
                    result_parts.append(self._render_body(node.body, render_ctx))
                except BreakLoop as interrupt:
                    result_parts.append(interrupt.output)
                    break
                except ContinueLoop as interrupt:
                    result_parts.append(interrupt.output)

        return "".join(result_parts)

    def process_break(self, processing_context: ProcessingContext) -> str:
        raise BreakLoop()

    def process_continue(self, processing_context: ProcessingContext) -> str:
        raise ContinueLoop()

    def process_assign(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, AssignNode):
            raise RuntimeError(f"Expected AssignNode, got {type(node)}")

        render_ctx = processing_context.render
        render_ctx.scope.assign(node.name, self.handlers.evaluate(node.expression, render_ctx))
        return ""

    def process_raw(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, RawNode):
            raise RuntimeError(f"Expected RawNode, got {type(node)}")
        return node.text

    def process_comment(self, processing_context: ProcessingContext) -> str:
        """Комментарии в вывод не попадают."""
        return ""

    def process_liquid(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, LiquidNode):
            raise RuntimeError(f"Expected LiquidNode, got {type(node)}")
        return self._render_body(node.body, processing_context.render)

    def _render_body(self, body: List[TemplateNode], render_ctx: RenderContext) -> str:
        """
        Рендерит список узлов в теле блока.

        Args:
            body: Список узлов для рендеринга
            render_ctx: Контекст прохода

        Returns:
            Отрендеренное содержимое
        """
        return self.handlers.render_ast(body, render_ctx)


def get_control_processor_rules(handlers: Callable[[], TemplateProcessorHandlers]) -> List[ProcessorRule]:
    """
    Возвращает правила обработки управляющих тегов.

    Args:
        handlers: Функтор, возвращающий обработчики ядра

    Returns:
        Список правил обработки с привязанными функторами
    """
    rules_instance = ControlProcessorRules(handlers)

    return [
        ProcessorRule(node_type=IfNode, processor_func=rules_instance.process_if),
        ProcessorRule(node_type=UnlessNode, processor_func=rules_instance.process_if),
        ProcessorRule(node_type=CaseNode, processor_func=rules_instance.process_case),
        ProcessorRule(node_type=ForNode, processor_func=rules_instance.process_for),
        ProcessorRule(node_type=BreakNode, processor_func=rules_instance.process_break),
        ProcessorRule(node_type=ContinueNode, processor_func=rules_instance.process_continue),
        ProcessorRule(node_type=AssignNode, processor_func=rules_instance.process_assign),
        ProcessorRule(node_type=RawNode, processor_func=rules_instance.process_raw),
        ProcessorRule(node_type=CommentNode, processor_func=rules_instance.process_comment),
        ProcessorRule(node_type=LiquidNode, processor_func=rules_instance.process_liquid),
    ]


__all__ = [
    "ControlProcessorRules",
    "get_control_processor_rules",
    "slice_collection",
    "iterable_items",
]
