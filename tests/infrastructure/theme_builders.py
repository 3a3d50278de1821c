"""
Построители тем для тестов.

Тема описывается словарём {логический путь: текст}; из него строится
MemoryThemeSource или каталог на диске.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from lq.config import EngineConfig
from lq.engine import ThemeEngine
from lq.theme import MemoryThemeSource


def section_source(body: str, schema: Optional[Dict[str, Any]] = None) -> str:
    """Текст файла секции: тело и (необязательно) блок schema."""
    if schema is None:
        return body
    return f"{body}\n{{% schema %}}\n{json.dumps(schema, indent=2)}\n{{% endschema %}}\n"


def template_document(
    sections: Dict[str, Dict[str, Any]],
    order: Optional[List[str]] = None,
    **extra: Any,
) -> str:
    """JSON-документ шаблона {sections, order}."""
    document: Dict[str, Any] = {
        "sections": sections,
        "order": list(sections) if order is None else order,
    }
    document.update(extra)
    return json.dumps(document, indent=2)


def hero_theme() -> Dict[str, str]:
    """Минимальная тема: секция hero с default heading и главная страница."""
    return {
        "layout/theme.liquid": (
            "<html><head>{{ content_for_header }}</head>"
            "<body>{{ content_for_layout }}</body></html>"
        ),
        "sections/hero.liquid": section_source(
            "<h1>{{ section.settings.heading }}</h1>",
            {
                "name": "Hero",
                "settings": [
                    {"type": "text", "id": "heading", "label": "Heading", "default": "Welcome"},
                ],
            },
        ),
        "templates/index.json": template_document(
            {"s1": {"type": "hero", "settings": {"heading": "Hi"}}},
            ["s1"],
        ),
    }


def make_source(files: Optional[Mapping[str, str]] = None) -> MemoryThemeSource:
    return MemoryThemeSource(dict(files or {}))


def make_engine(files: Optional[Mapping[str, str]] = None, config: Optional[EngineConfig] = None) -> ThemeEngine:
    """Движок поверх темы в памяти."""
    return ThemeEngine(make_source(files), config)


__all__ = ["section_source", "template_document", "hero_theme", "make_source", "make_engine"]
