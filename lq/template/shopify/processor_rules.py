"""
Правила обработки тегов темы.

Сниппеты и секции рендерятся через обработчики ядра; каждая ошибка
загрузки или рендеринга превращается в именованный диагностический
комментарий. Теги capture/increment/decrement/cycle пишут в нижний
фрейм области видимости прохода.
"""

from __future__ import annotations

import html
import logging
import math
from typing import Any, Callable, Dict, List, Sequence

from .nodes import (
    CaptureNode,
    ContentForNode,
    CycleNode,
    DecrementNode,
    FormNode,
    IncludeNode,
    IncrementNode,
    JavascriptNode,
    LayoutNode,
    PaginateNode,
    RenderNode,
    SchemaNode,
    SectionTagNode,
    SectionsTagNode,
    StyleNode,
    StylesheetNode,
    TablerowNode,
)
from ..context import BreakLoop, ContinueLoop, RenderContext
from ..control.processor_rules import slice_collection
from ..handlers import TemplateProcessorHandlers
from ..types import ProcessorRule, ProcessingContext
from ...diagnostics import comment
from ...expressions import Expression, VariablePath
from ...scope import Scope, for_loop, tablerow_loop
from ...theme.paths import safe_join
from ...values import Value, to_int, to_str

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


def rebind_path(scope: Scope, expression: Expression, value: Value) -> Dict[str, Any]:
    """
    Фрейм, в котором путь a.b.c указывает на value.

    Объекты по пути копируются, исходные данные не изменяются.
    Для путей с вычисляемыми сегментами возвращается пустой фрейм.
    """
    if not isinstance(expression, VariablePath) or not expression.name:
        return {}
    if not all(isinstance(segment, str) for segment in expression.segments):
        return {}

    def rebound(container: Value, segments: Sequence[Any]) -> Value:
        if not segments:
            return value
        if not isinstance(container, dict):
            return container
        copy = dict(container)
        copy[segments[0]] = rebound(container.get(segments[0]), segments[1:])
        return copy

    return {expression.name: rebound(scope.resolve(expression.name), expression.segments)}


class ShopifyProcessorRules:
    """
    Класс правил обработки тегов темы.

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

    # ---- секции ----

    def process_section(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, SectionTagNode):
            raise RuntimeError(f"Expected SectionTagNode, got {type(node)}")

        render_ctx = processing_context.render
        if render_ctx.nested(node.name).depth_exceeded:
            logger.warning(f"Max render depth exceeded for section '{node.name}'")
            return comment(f"Max render depth exceeded: {node.name}")

        try:
            return self.handlers.process_section_ref(node.name, render_ctx)
        except Exception as e:
            logger.warning(f"Error rendering section '{node.name}': {e}")
            return comment(f"Section Error: {node.name}: {e}")

    def process_sections(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, SectionsTagNode):
            raise RuntimeError(f"Expected SectionsTagNode, got {type(node)}")

        render_ctx = processing_context.render
        if render_ctx.nested(node.group).depth_exceeded:
            logger.warning(f"Max render depth exceeded for section group '{node.group}'")
            return comment(f"Max render depth exceeded: {node.group}")

        try:
            return self.handlers.process_section_group(node.group, render_ctx)
        except Exception as e:
            logger.warning(f"Error rendering section group '{node.group}': {e}")
            return comment(f"Section Group Error: {node.group}: {e}")

    # ---- сниппеты ----

    def process_render(self, processing_context: ProcessingContext) -> str:
        """
        Обрабатывает {% render %} и {% include %}.

        render получает изолированную область (только аргументы, нижний
        фрейм и глобальные объекты), include работает в области вызывающего
        шаблона с дополнительным фреймом для аргументов.
        """
        node = processing_context.get_node()
        if not isinstance(node, RenderNode):
            raise RuntimeError(f"Expected RenderNode, got {type(node)}")

        render_ctx = processing_context.render
        is_include = isinstance(node, IncludeNode)

        raw_name = to_str(self.handlers.evaluate(node.snippet, render_ctx))
        path = safe_join("snippets", raw_name, ".liquid")
        if path is None:
            logger.warning(f"Invalid snippet name {raw_name!r} in '{render_ctx.template_name}'")
            return comment("Invalid snippet name")
        snippet_name = path[len("snippets/"):-len(".liquid")]

        if render_ctx.nested(path).depth_exceeded:
            logger.warning(f"Max render depth ({render_ctx.max_depth}) exceeded for '{snippet_name}'")
            return comment(f"Max render depth exceeded: {snippet_name}")

        try:
            source = self.handlers.load_template(path)
            if source is None:
                logger.warning(f"Snippet '{snippet_name}' not found (from '{render_ctx.template_name}')")
                kind = "Include" if is_include else "Snippet"
                return comment(f"{kind} not found: {snippet_name}")

            ast = self.handlers.parse_source(source, path)
            variables: Dict[str, Any] = {
                name: self.handlers.evaluate(expr, render_ctx) for name, expr in node.arguments
            }
            alias = node.alias or snippet_name.replace("-", "_")

            if node.for_expr is not None:
                collection = self.handlers.evaluate(node.for_expr, render_ctx)
                if collection is None:
                    return ""
                if isinstance(collection, list):
                    return self._render_each(ast, path, collection, alias, variables, render_ctx, is_include)
                variables[alias] = collection
            elif node.with_expr is not None:
                variables[alias] = self.handlers.evaluate(node.with_expr, render_ctx)

            return self._render_snippet(ast, path, variables, render_ctx, is_include)

        except Exception as e:
            logger.warning(f"Error rendering snippet '{snippet_name}': {e}")
            return comment(f"Snippet Error: {snippet_name}: {e}")

    def _render_each(
        self,
        ast,
        path: str,
        collection: List[Any],
        alias: str,
        variables: Dict[str, Any],
        render_ctx: RenderContext,
        is_include: bool,
    ) -> str:
        """render ... for: одна изолированная область на элемент, со своим forloop."""
        parent = render_ctx.scope.resolve("forloop")
        parentloop = parent if isinstance(parent, dict) else None

        result_parts: List[str] = []
        for index, item in enumerate(collection):
            item_variables = dict(variables)
            item_variables[alias] = item
            item_variables["forloop"] = for_loop(index, len(collection), parentloop)
            result_parts.append(self._render_snippet(ast, path, item_variables, render_ctx, is_include))
        return "".join(result_parts)

    def _render_snippet(
        self,
        ast,
        path: str,
        variables: Dict[str, Any],
        render_ctx: RenderContext,
        is_include: bool,
    ) -> str:
        if is_include:
            scope = render_ctx.scope
            with scope.pushed(variables):
                return self.handlers.render_template(ast, render_ctx.nested(path))

        isolated = render_ctx.scope.isolated(variables)
        return self.handlers.render_template(ast, render_ctx.nested(path, isolated))

    # ---- блоки ----

    def process_form(self, processing_context: ProcessingContext) -> str:
        """Обёртка <form> с объектом form, видимым в теле."""
        node = processing_context.get_node()
        if not isinstance(node, FormNode):
            raise RuntimeError(f"Expected FormNode, got {type(node)}")

        render_ctx = processing_context.render
        form_type = to_str(self.handlers.evaluate(node.form_type, render_ctx))

        attributes = "".join(
            f' {html.escape(name)}="{html.escape(to_str(self.handlers.evaluate(expr, render_ctx)))}"'
            for name, expr in node.arguments
        )
        form = {
            "type": form_type,
            "errors": None,
            "posted_successfully": False,
        }

        with render_ctx.scope.pushed({"form": form}):
            inner = self.handlers.render_ast(node.body, render_ctx)

        return f'<form action="/form/{html.escape(form_type)}" method="post"{attributes}>{inner}</form>'

    def process_paginate(self, processing_context: ProcessingContext) -> str:
        """
        Первая страница коллекции.

        В теле виден объект paginate, а путь коллекции указывает
        на элементы первой страницы.
        """
        node = processing_context.get_node()
        if not isinstance(node, PaginateNode):
            raise RuntimeError(f"Expected PaginateNode, got {type(node)}")

        render_ctx = processing_context.render
        value = self.handlers.evaluate(node.collection, render_ctx)
        items = value if isinstance(value, list) else []

        page_size = DEFAULT_PAGE_SIZE
        if node.page_size is not None:
            page_size = to_int(self.handlers.evaluate(node.page_size, render_ctx), DEFAULT_PAGE_SIZE)
        if page_size <= 0:
            page_size = DEFAULT_PAGE_SIZE

        pages = math.ceil(len(items) / page_size)
        page_items = items[:page_size]
        current_page = 1

        paginate = {
            "current_offset": 0,
            "current_page": current_page,
            "items": len(items),
            "page_size": page_size,
            "pages": pages,
            "parts": [
                {"is_link": number != current_page, "title": str(number), "url": f"?page={number}"}
                for number in range(1, pages + 1)
            ],
            "previous": None,
            "next": {"title": "Next", "url": "?page=2"} if pages > 1 else None,
        }

        frame = rebind_path(render_ctx.scope, node.collection, page_items)
        frame["paginate"] = paginate

        with render_ctx.scope.pushed(frame):
            return self.handlers.render_ast(node.body, render_ctx)

    def process_style(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, StyleNode):
            raise RuntimeError(f"Expected StyleNode, got {type(node)}")
        return f"<style>{self.handlers.render_ast(node.body, processing_context.render)}</style>"

    def process_stylesheet(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, StylesheetNode):
            raise RuntimeError(f"Expected StylesheetNode, got {type(node)}")
        return f"<style>{node.text}</style>" if node.text else ""

    def process_javascript(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, JavascriptNode):
            raise RuntimeError(f"Expected JavascriptNode, got {type(node)}")
        return f"<script>{node.text}</script>" if node.text else ""

    def process_silent(self, processing_context: ProcessingContext) -> str:
        """schema и layout ничего не выводят."""
        return ""

    def process_content_for(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, ContentForNode):
            raise RuntimeError(f"Expected ContentForNode, got {type(node)}")
        return to_str(processing_context.render.scope.resolve(f"content_for_{node.name}"))

    # ---- состояние нижнего фрейма ----

    def process_capture(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, CaptureNode):
            raise RuntimeError(f"Expected CaptureNode, got {type(node)}")

        render_ctx = processing_context.render
        captured = self.handlers.render_ast(node.body, render_ctx)
        render_ctx.scope.assign_bottom(node.name, captured)
        return ""

    def process_increment(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, IncrementNode):
            raise RuntimeError(f"Expected IncrementNode, got {type(node)}")
        return str(processing_context.render.scope.increment(node.name))

    def process_decrement(self, processing_context: ProcessingContext) -> str:
        node = processing_context.get_node()
        if not isinstance(node, DecrementNode):
            raise RuntimeError(f"Expected DecrementNode, got {type(node)}")
        return str(processing_context.render.scope.decrement(node.name))

    def process_cycle(self, processing_context: ProcessingContext) -> str:
        """
        Счётчик группы растёт при каждом вызове,
        значение выбирается по модулю длины текущего списка.
        """
        node = processing_context.get_node()
        if not isinstance(node, CycleNode):
            raise RuntimeError(f"Expected CycleNode, got {type(node)}")

        render_ctx = processing_context.render
        key = node.key
        if node.group is not None:
            key = to_str(self.handlers.evaluate(node.group, render_ctx))

        index = render_ctx.scope.next_cycle_index(key) % len(node.values)
        return to_str(self.handlers.evaluate(node.values[index], render_ctx))

    def process_tablerow(self, processing_context: ProcessingContext) -> str:
        """
        Строки <tr class="rowN"> и ячейки <td class="colN">.

        Строка закрывается на последней колонке или последнем элементе.
        """
        node = processing_context.get_node()
        if not isinstance(node, TablerowNode):
            raise RuntimeError(f"Expected TablerowNode, got {type(node)}")

        render_ctx = processing_context.render
        scope = render_ctx.scope

        value = self.handlers.evaluate(node.collection, render_ctx)
        items = list(value) if isinstance(value, list) else []
        offset = to_int(self.handlers.evaluate(node.offset, render_ctx)) if node.offset else None
        limit = to_int(self.handlers.evaluate(node.limit, render_ctx)) if node.limit else None
        items = slice_collection(items, offset, limit if limit else None)

        cols = to_int(self.handlers.evaluate(node.cols, render_ctx)) if node.cols else 0
        if cols <= 0:
            cols = len(items)

        result_parts: List[str] = []
        for index, item in enumerate(items):
            loop = tablerow_loop(index, len(items), cols)
            if loop["col_first"]:
                result_parts.append(f'<tr class="row{loop["row"]}">')
            result_parts.append(f'<td class="col{loop["col"]}">')

            stop = False
            with scope.pushed({node.variable: item, "tablerowloop": loop}):
                try:
                    cell = self.handlers.render_ast(node.body, render_ctx)
                except BreakLoop as interrupt:
                    cell = interrupt.output
                    stop = True
                except ContinueLoop as interrupt:
                    cell = interrupt.output

            result_parts.append(cell)
            result_parts.append("</td>")
            if loop["col_last"] or stop:
                result_parts.append("</tr>")
            if stop:
                break

        return "".join(result_parts)


def get_shopify_processor_rules(handlers: Callable[[], TemplateProcessorHandlers]) -> List[ProcessorRule]:
    """
    Возвращает правила обработки тегов темы.

    Args:
        handlers: Функтор, возвращающий обработчики ядра

    Returns:
        Список правил обработки с привязанными функторами
    """
    rules_instance = ShopifyProcessorRules(handlers)

    return [
        ProcessorRule(node_type=SectionTagNode, processor_func=rules_instance.process_section),
        ProcessorRule(node_type=SectionsTagNode, processor_func=rules_instance.process_sections),
        ProcessorRule(node_type=RenderNode, processor_func=rules_instance.process_render),
        ProcessorRule(node_type=IncludeNode, processor_func=rules_instance.process_render),
        ProcessorRule(node_type=FormNode, processor_func=rules_instance.process_form),
        ProcessorRule(node_type=PaginateNode, processor_func=rules_instance.process_paginate),
        ProcessorRule(node_type=SchemaNode, processor_func=rules_instance.process_silent),
        ProcessorRule(node_type=StylesheetNode, processor_func=rules_instance.process_stylesheet),
        ProcessorRule(node_type=JavascriptNode, processor_func=rules_instance.process_javascript),
        ProcessorRule(node_type=StyleNode, processor_func=rules_instance.process_style),
        ProcessorRule(node_type=LayoutNode, processor_func=rules_instance.process_silent),
        ProcessorRule(node_type=ContentForNode, processor_func=rules_instance.process_content_for),
        ProcessorRule(node_type=CaptureNode, processor_func=rules_instance.process_capture),
        ProcessorRule(node_type=IncrementNode, processor_func=rules_instance.process_increment),
        ProcessorRule(node_type=DecrementNode, processor_func=rules_instance.process_decrement),
        ProcessorRule(node_type=CycleNode, processor_func=rules_instance.process_cycle),
        ProcessorRule(node_type=TablerowNode, processor_func=rules_instance.process_tablerow),
    ]


__all__ = ["ShopifyProcessorRules", "get_shopify_processor_rules", "rebind_path", "DEFAULT_PAGE_SIZE"]
