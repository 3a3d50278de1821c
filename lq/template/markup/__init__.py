"""
Плагин разметки: разделители {{ }} и {% %}.

Обрабатывает:
- {{ expr | filter: arg }} - вывод выражений
- {{- -}} и {%- -%} - управление пробелами
- нераспознанные теги - пустой вывод с предупреждением
"""

from __future__ import annotations

from .nodes import OutputNode, UnknownTagNode
from .plugin import MarkupPlugin

__all__ = ["MarkupPlugin", "OutputNode", "UnknownTagNode"]
