"""
Внутренние обработчики для модульного шаблонизатора.

Предоставляет типизированный интерфейс для взаимодействия плагинов
с ядром шаблонизатора, избегая загрязнения внешних контрактов.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .context import RenderContext
from .nodes import TemplateNode, TemplateAST
from .types import ProcessingContext
from ..expressions import Expression
from ..values import Value


@runtime_checkable
class TemplateProcessorHandlers(Protocol):
    """
    Протокол для внутренних обработчиков шаблонизатора.

    Определяет типизированный интерфейс для вызова функций ядра
    из плагинов без нарушения инкапсуляции.
    """

    def process_ast_node(self, context: ProcessingContext) -> str:
        """
        Обрабатывает один узел AST с контекстом.

        Ошибки узла превращаются в диагностический комментарий.
        """
        ...

    def render_ast(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
        """
        Рендерит список узлов (тело блочного тега).

        Прерывания цикла (break/continue) пробрасываются наружу
        вместе с уже накопленным выводом.
        """
        ...

    def render_template(self, ast: TemplateAST, render_ctx: RenderContext) -> str:
        """
        Рендерит шаблон целиком (страница, секция, сниппет).

        В отличие от render_ast поглощает прерывания цикла на своей границе.
        """
        ...

    def parse_next_node(self, context) -> Optional[TemplateNode]:
        """
        Парсит следующий узел из контекста парсинга.

        Применяет все зарегистрированные правила парсинга для текущей позиции.
        Используется для рекурсивного парсинга вложенных структур.
        """
        ...

    def parse_source(self, text: str, template_name: str = "") -> TemplateAST:
        """Токенизирует и парсит исходный текст шаблона (с кэшированием)."""
        ...

    def load_template(self, path: str) -> Optional[str]:
        """Читает файл темы по логическому пути; None, если файла нет."""
        ...

    def evaluate(self, expression: Expression, render_ctx: RenderContext) -> Value:
        """Вычисляет выражение в области видимости прохода."""
        ...

    def test(self, expression: Expression, render_ctx: RenderContext) -> bool:
        """Вычисляет выражение как условие."""
        ...

    def process_section_ref(self, name: str, render_ctx: RenderContext) -> str:
        """Рендерит секцию, подключённую тегом {% section %}."""
        ...

    def process_section_group(self, name: str, render_ctx: RenderContext) -> str:
        """Рендерит группу секций, подключённую тегом {% sections %}."""
        ...


__all__ = ["TemplateProcessorHandlers"]
