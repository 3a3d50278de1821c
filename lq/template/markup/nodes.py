"""
AST-узлы разметки: вывод выражения и нераспознанный тег.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..nodes import TemplateNode
from ...expressions import Expression


@dataclass(frozen=True)
class OutputNode(TemplateNode):
    """
    Вывод выражения {{ expr | filter }} или {% echo expr %}.

    Attributes:
        expression: Разобранное выражение с фильтрами
        markup: Исходный текст выражения (для диагностики)
    """
    tag_name: ClassVar[str] = "output"

    expression: Expression
    markup: str = ""


@dataclass(frozen=True)
class UnknownTagNode(TemplateNode):
    """
    Нераспознанный или некорректный тег.

    Рендерится в пустую строку с предупреждением в логе,
    остальная часть шаблона не затрагивается.

    Attributes:
        name: Имя тега ("{{" для некорректного вывода)
        markup: Аргументы тега
        reason: Причина, по которой тег не был разобран
    """
    tag_name: ClassVar[str] = "unknown"

    name: str
    markup: str = ""
    reason: str = ""


__all__ = ["OutputNode", "UnknownTagNode"]
