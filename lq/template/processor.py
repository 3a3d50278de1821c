"""
Процессор шаблонов Liquid.

Публичный API, объединяющий лексер, парсер и обработчики узлов плагинов
в удобный интерфейс для рендеринга шаблонов темы.

Позволяет расширять набор тегов через плагины.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Protocol, Tuple

from .context import LoopInterrupt, RenderContext
from .handlers import TemplateProcessorHandlers
from .lexer import ContextualLexer
from .nodes import TemplateNode, TemplateAST, TextNode
from .parser import ModularParser
from .registry import TemplateRegistry
from .types import ProcessingContext
from ..diagnostics import comment
from ..expressions import Expression, ExpressionEvaluator
from ..filters import FilterRegistry
from ..values import Value

logger = logging.getLogger(__name__)


class TemplateProcessingError(Exception):
    """Общая ошибка обработки шаблона."""

    def __init__(self, message: str, template_name: str = "", cause: Optional[Exception] = None):
        super().__init__(f"Template processing error in '{template_name}': {message}")
        self.template_name = template_name
        self.cause = cause


class ThemeHandler(Protocol):
    """
    Обратные вызовы к слою темы.

    Устанавливается движком: процессор сам не знает, где лежат файлы
    темы и как собираются секции.
    """

    def load_template(self, path: str) -> Optional[str]:
        ...

    def render_section_ref(self, name: str, render_ctx: RenderContext) -> str:
        ...

    def render_section_group(self, name: str, render_ctx: RenderContext) -> str:
        ...


class TemplateProcessor:
    """
    Основной процессор шаблонов.
    """

    def __init__(self, registry: TemplateRegistry, filters: FilterRegistry):
        """
        Инициализирует процессор шаблонов.

        Args:
            registry: Реестр компонентов (передается извне для избежания глобального состояния)
            filters: Реестр фильтров для вычисления выражений
        """
        self.registry = registry
        self.filters = filters

        # Инициализируем компоненты
        self.lexer = ContextualLexer(self.registry)
        self.parser = ModularParser(self.registry)

        # Кэш разобранных шаблонов: имя -> (текст, AST), одна версия на имя
        self._template_cache: Dict[str, Tuple[str, TemplateAST]] = {}

        # Обработчик темы (устанавливается извне)
        self.theme_handler: Optional[ThemeHandler] = None

        # Создаем анонимный класс обработчиков прямо здесь
        class ProcessorHandlers(TemplateProcessorHandlers):
            def process_ast_node(self, context: ProcessingContext) -> str:
                """Делегирует обработку узла с контекстом."""
                return processor_self._evaluate_node(context.get_node(), context.ast, context.node_index, context.render)

            def render_ast(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
                return processor_self._evaluate_ast(ast, render_ctx)

            def render_template(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
                return processor_self.render_template(ast, render_ctx)

            def parse_next_node(self, context) -> Optional[TemplateNode]:
                """Делегирует парсинг к главному парсеру."""
                return processor_self.parser._parse_next_node(context)

            def parse_source(self, text: str, template_name: str = "") -> TemplateAST:
                return processor_self.parse_source(text, template_name)

            def load_template(self, path: str) -> Optional[str]:
                return processor_self._require_theme_handler(path).load_template(path)

            def evaluate(self, expression: Expression, render_ctx: RenderContext) -> Value:
                return processor_self.evaluate(expression, render_ctx)

            def test(self, expression: Expression, render_ctx: RenderContext) -> bool:
                return processor_self.test(expression, render_ctx)

            def process_section_ref(self, name: str, render_ctx: RenderContext) -> str:
                return processor_self._require_theme_handler(name).render_section_ref(name, render_ctx)

            def process_section_group(self, name: str, render_ctx: RenderContext) -> str:
                return processor_self._require_theme_handler(name).render_section_group(name, render_ctx)

        # Сохраняем ссылку на self для замыкания
        processor_self = self
        self.handlers = ProcessorHandlers()

    def set_theme_handler(self, handler: ThemeHandler) -> None:
        """
        Устанавливает обработчик темы.

        Args:
            handler: Объект с load_template, render_section_ref, render_section_group
        """
        self.theme_handler = handler

    def parse_source(self, text: str, template_name: str = "") -> TemplateAST:
        """
        Парсит текст шаблона в AST с кэшированием.

        Для каждого имени хранится только последняя версия текста,
        так что кэш растёт с числом шаблонов темы, а не правок.
        """
        cached = self._template_cache.get(template_name)
        if cached is not None and cached[0] == text:
            return cached[1]

        try:
            tokens = self.lexer.tokenize(text)
            ast = self.parser.parse(tokens, template_name)
        except Exception as e:
            raise TemplateProcessingError(f"Failed to parse template: {e}", template_name, e)

        self._template_cache[template_name] = (text, ast)
        logger.debug(f"Parsed template '{template_name}' -> {len(ast)} nodes")
        return ast

    def clear_cache(self) -> None:
        self._template_cache.clear()

    def render_text(self, text: str, render_ctx: RenderContext) -> str:
        """
        Рендерит шаблон из текста.

        Args:
            text: Исходный текст шаблона
            render_ctx: Контекст прохода (имя шаблона берётся из него)

        Returns:
            Отрендеренный текст

        Raises:
            TemplateProcessingError: Если шаблон не удалось разобрать
        """
        def process_text():
            ast = self.parse_source(text, render_ctx.template_name)
            return self.render_template(ast, render_ctx)

        return self._handle_template_errors(
            process_text,
            render_ctx.template_name,
            "Unexpected error during rendering",
        )

    def render_template(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
        """
        Рендерит AST шаблона целиком.

        break/continue вне цикла завершают шаблон с уже накопленным выводом.
        """
        try:
            return self._evaluate_ast(ast, render_ctx)
        except LoopInterrupt as interrupt:
            logger.debug(f"Loop interrupt outside of a loop in '{render_ctx.template_name}'")
            return interrupt.output

    def evaluate(self, expression: Expression, render_ctx: RenderContext) -> Value:
        return ExpressionEvaluator(render_ctx.scope, self.filters).evaluate(expression)

    def test(self, expression: Expression, render_ctx: RenderContext) -> bool:
        return ExpressionEvaluator(render_ctx.scope, self.filters).test(expression)

    # ======= Внутренние методы =======

    def _evaluate_ast(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
        """Оценивает AST и возвращает отрендеренный текст."""
        result_parts: List[str] = []

        for i, node in enumerate(ast):
            try:
                rendered = self._evaluate_node(node, ast, i, render_ctx)
            except LoopInterrupt as interrupt:
                # Вывод до прерывания принадлежит текущей итерации
                interrupt.output = "".join(result_parts) + interrupt.output
                raise
            if rendered:
                result_parts.append(rendered)

        return "".join(result_parts)

    def _evaluate_node(self, node: TemplateNode, ast: TemplateAST, node_index: int, render_ctx: RenderContext) -> str:
        """
        Оценивает один узел AST.

        Ошибка обработчика не прерывает проход: узел заменяется
        диагностическим комментарием.
        """
        processing_context = ProcessingContext(ast=ast, node_index=node_index, render=render_ctx)

        # Получаем обработчики для данного типа узла
        processors = self.registry.get_processors_for_node(type(node))

        try:
            if processors:
                # Используем первый (наивысший приоритет) обработчик
                return processors[0].processor_func(processing_context)
        except LoopInterrupt:
            raise
        except Exception as e:
            logger.warning(f"Error in {{% {node.tag_name} %}} of '{render_ctx.template_name}': {e}")
            return comment(f"Liquid Error ({node.tag_name}): {e}")

        # Fallback для базовых узлов
        if isinstance(node, TextNode):
            return node.text

        logger.warning(f"No processor found for node type: {type(node).__name__}")
        return ""

    def _require_theme_handler(self, target: str) -> ThemeHandler:
        if self.theme_handler is None:
            raise RuntimeError(f"No theme handler set for loading '{target}'")
        return self.theme_handler

    def _handle_template_errors(self, func: Callable[[], str], template_name: str, error_message: str) -> str:
        """Общий обработчик ошибок для операций с шаблонами."""
        try:
            return func()
        except TemplateProcessingError:
            # Передаем ошибки обработки как есть
            raise
        except Exception as e:
            # Оборачиваем другие ошибки в TemplateProcessingError
            raise TemplateProcessingError(error_message, template_name, e)


def create_template_processor(filters: FilterRegistry) -> TemplateProcessor:
    """
    Создает процессор шаблонов с уже установленными доступными плагинами.

    Args:
        filters: Реестр фильтров

    Returns:
        Настроенный процессор шаблонов
    """
    registry = TemplateRegistry()

    processor = TemplateProcessor(registry, filters)

    # Регистрируем доступные плагины
    from .markup import MarkupPlugin
    from .control import ControlFlowPlugin
    from .shopify import ShopifyTagsPlugin

    registry.register_plugin(MarkupPlugin())
    registry.register_plugin(ControlFlowPlugin())
    registry.register_plugin(ShopifyTagsPlugin())

    # Инициализируем плагины после регистрации всех компонентов
    registry.initialize_plugins(processor.handlers)

    return processor


__all__ = ["TemplateProcessor", "TemplateProcessingError", "ThemeHandler", "create_template_processor"]
