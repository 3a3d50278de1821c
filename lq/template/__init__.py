"""
Модульный шаблонизатор Liquid.

Лексер и парсер на основе плагинов, процессор с границей ошибок
на уровне каждого тега и плагины тегов: разметка, управляющие
конструкции и теги темы.
"""

from __future__ import annotations

from .context import RenderContext
from .processor import TemplateProcessor, TemplateProcessingError, ThemeHandler, create_template_processor

__all__ = [
    "RenderContext",
    "TemplateProcessor",
    "TemplateProcessingError",
    "ThemeHandler",
    "create_template_processor",
]
