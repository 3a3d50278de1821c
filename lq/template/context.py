"""
Контекст одного прохода рендеринга.

RenderContext передаётся явно через все вызовы обработчиков узлов:
область видимости, имя шаблона для диагностики и текущая глубина
вложенности render/include/section.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..scope import Scope

DEFAULT_MAX_RENDER_DEPTH = 50


@dataclass(frozen=True)
class RenderContext:
    """
    Состояние рендеринга, видимое обработчикам узлов.

    Attributes:
        scope: Цепочка областей видимости текущего шаблона
        template_name: Логический путь шаблона (для диагностики)
        depth: Глубина вложенности render/include/section
        max_depth: Предельная глубина вложенности
    """
    scope: Scope
    template_name: str = ""
    depth: int = 0
    max_depth: int = DEFAULT_MAX_RENDER_DEPTH

    def nested(self, template_name: str, scope: Optional[Scope] = None) -> "RenderContext":
        """Контекст для вложенного шаблона: глубина +1, та же или новая область."""
        return replace(
            self,
            scope=scope if scope is not None else self.scope,
            template_name=template_name,
            depth=self.depth + 1,
        )

    def with_scope(self, scope: Scope) -> "RenderContext":
        """Тот же шаблон с другой областью видимости."""
        return replace(self, scope=scope)

    @property
    def depth_exceeded(self) -> bool:
        return self.depth > self.max_depth


class LoopInterrupt(Exception):
    """
    Прерывание итерации цикла (break/continue).

    Несёт вывод, накопленный до прерывания: каждый уровень рендеринга
    дописывает свою часть перед повторным выбросом.
    """

    def __init__(self, output: str = ""):
        super().__init__(type(self).__name__)
        self.output = output


class BreakLoop(LoopInterrupt):
    """{% break %}"""
    pass


class ContinueLoop(LoopInterrupt):
    """{% continue %}"""
    pass


__all__ = [
    "RenderContext",
    "LoopInterrupt",
    "BreakLoop",
    "ContinueLoop",
    "DEFAULT_MAX_RENDER_DEPTH",
]
