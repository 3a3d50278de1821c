"""
Сборка страницы из JSON-документа шаблона.

Документ {sections, order} обходится в порядке order: каждая секция
рендерится отдельно и оборачивается в контейнер с её id, результат
становится content_for_layout макета.
"""

from __future__ import annotations

import html
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .preview import build_content_for_header
from ..diagnostics import comment
from ..errors import DocumentError
from ..sections import SectionRenderer
from ..template import RenderContext, TemplateProcessingError, TemplateProcessor
from ..template.shopify.nodes import LayoutNode
from ..theme.jsonc import load_jsonc
from ..theme.paths import safe_join
from ..theme.source import ThemeSource
from ..values import as_dict, lookup, to_str

logger = logging.getLogger(__name__)

TEMPLATES_DIR = "templates"
LAYOUT_DIR = "layout"
DEFAULT_LAYOUT = "theme"
# Подкаталоги templates/, допустимые в имени шаблона
TEMPLATE_SUBDIRS = ("customers",)


@dataclass(frozen=True)
class RenderedDocument:
    """
    Результат рендеринга страницы.

    Attributes:
        html: Итоговый HTML
        section_ids: Идентификаторы выведенных секций в порядке вывода
        template_name: Имя шаблона страницы
    """
    html: str
    section_ids: List[str] = field(default_factory=list)
    template_name: str = ""


def section_wrapper(section_id: str, inner: str, group: Optional[str] = None) -> str:
    """Контейнер секции, по id которого редактор находит её на странице."""
    classes = "shopify-section"
    if group:
        classes += f" shopify-section-group-{html.escape(group)}"
    return f'<div id="shopify-section-{html.escape(section_id)}" class="{classes}">{inner}</div>\n'


def template_path(name: str, suffix: str) -> Optional[str]:
    """
    Логический путь файла шаблона.

    Допускается один уровень подкаталога из TEMPLATE_SUBDIRS
    (customers/login), остальное проходит через sanitize_name.
    """
    directory, _, base = name.rpartition("/")
    if directory in TEMPLATE_SUBDIRS:
        return safe_join(f"{TEMPLATES_DIR}/{directory}", base, suffix)
    return safe_join(TEMPLATES_DIR, name, suffix)


class PageAssembler:
    """
    Сборщик страниц и групп секций.
    """

    def __init__(self, source: ThemeSource, sections: SectionRenderer, processor: TemplateProcessor):
        self.source = source
        self.sections = sections
        self.processor = processor

    # ---- документы ----

    def load_document(self, path: str, name: str) -> Optional[Dict[str, Any]]:
        """
        Загружает JSON-документ шаблона или группы секций.

        Returns:
            Словарь документа или None, если файла нет

        Raises:
            DocumentError: Документ не является корректным JSON-объектом
        """
        text = self.source.get_file(path)
        if text is None:
            return None
        try:
            data = load_jsonc(text)
        except json.JSONDecodeError as e:
            raise DocumentError(name, e) from e
        if not isinstance(data, dict):
            raise DocumentError(name, ValueError("document root must be a JSON object"))
        return data

    def render_sections(
        self,
        document: Dict[str, Any],
        render_ctx: RenderContext,
        group: Optional[str] = None,
    ) -> Tuple[str, List[str]]:
        """
        Рендерит секции документа в порядке order.

        Идентификаторы без записи в sections пропускаются. Ошибка одной
        секции заменяется диагностикой только для неё.

        Returns:
            (HTML всех секций, выведенные идентификаторы)
        """
        sections = as_dict(document.get("sections"))
        order = document.get("order")
        if not isinstance(order, list):
            order = list(sections)

        parts: List[str] = []
        emitted: List[str] = []
        for section_id in order:
            entry = sections.get(section_id) if isinstance(section_id, str) else None
            if not isinstance(entry, dict):
                logger.debug(f"Section id '{section_id}' from order has no entry in sections, skipped")
                continue

            parts.append(section_wrapper(section_id, self._render_entry(section_id, entry, render_ctx), group))
            emitted.append(section_id)

        return "".join(parts), emitted

    def _render_entry(self, section_id: str, entry: Dict[str, Any], render_ctx: RenderContext) -> str:
        section_type = entry.get("type")
        if not isinstance(section_type, str) or not section_type:
            logger.warning(f"Section '{section_id}' has no type")
            return comment(f"Section type missing: {section_id}")

        instance = dict(entry, id=section_id)
        try:
            return self.sections.render(section_type, instance, render_ctx)
        except Exception as e:
            logger.warning(f"Error rendering section '{section_id}' ({section_type}): {e}")
            return comment(f"Section Error: {section_id}: {e}")

    # ---- страницы ----

    def render_page(self, template_name: str, render_ctx: RenderContext, strict: bool = False) -> RenderedDocument:
        """
        Рендерит страницу по имени шаблона.

        Порядок поиска: templates/NAME.json, затем templates/NAME.liquid;
        если нет ни того, ни другого, возвращается диагностика.

        Args:
            template_name: Имя шаблона (index, product, customers/login, ...)
            render_ctx: Контекст прохода со свежей областью видимости
            strict: Поднимать DocumentError вместо диагностики страницы

        Raises:
            DocumentError: При strict=True и некорректном JSON документа
        """
        json_path = template_path(template_name, ".json")
        if json_path is None:
            return RenderedDocument(comment("Invalid template name"), [], template_name)

        try:
            document = self.load_document(json_path, template_name)
        except DocumentError as e:
            if strict:
                raise
            logger.warning(f"Template '{template_name}' is not valid JSON: {e.cause}")
            return RenderedDocument(comment(f"Template JSON parse error: {template_name}: {e.cause}"), [], template_name)

        if document is None:
            return self._render_bare_template(template_name, render_ctx)

        page_ctx = render_ctx.nested(json_path)
        content, section_ids = self.render_sections(document, page_ctx)

        # "layout": false отключает макет
        layout = document.get("layout", DEFAULT_LAYOUT)
        if layout is False:
            return RenderedDocument(content, section_ids, template_name)

        layout_name = layout if isinstance(layout, str) else None
        return RenderedDocument(self.render_layout(layout_name, content, render_ctx), section_ids, template_name)

    def _render_bare_template(self, template_name: str, render_ctx: RenderContext) -> RenderedDocument:
        """Шаблон .liquid без секций; макет выбирается тегом layout."""
        path = template_path(template_name, ".liquid")
        text = self.source.get_file(path) if path else None
        if text is None:
            logger.warning(f"Template '{template_name}' not found")
            return RenderedDocument(comment(f"Template not found: {template_name}"), [], template_name)

        try:
            ast = self.processor.parse_source(text, path)
            content = self.processor.render_template(ast, render_ctx.nested(path))
        except TemplateProcessingError as e:
            logger.warning(f"Error rendering template '{template_name}': {e}")
            return RenderedDocument(comment(f"Template Error: {template_name}: {e}"), [], template_name)

        layout: Optional[str] = DEFAULT_LAYOUT
        for node in ast:
            if isinstance(node, LayoutNode):
                layout = node.name

        if layout is None:
            return RenderedDocument(content, [], template_name)
        return RenderedDocument(self.render_layout(layout, content, render_ctx), [], template_name)

    def render_layout(self, layout_name: Optional[str], content: str, render_ctx: RenderContext) -> str:
        """
        Рендерит макет вокруг содержимого страницы.

        Без файла макета возвращается само содержимое.
        """
        path = safe_join(LAYOUT_DIR, layout_name or DEFAULT_LAYOUT, ".liquid")
        text = self.source.get_file(path) if path else None
        if text is None:
            logger.debug(f"Layout '{layout_name}' not found, returning sections only")
            return content

        scope = render_ctx.scope
        shop_name = to_str(lookup(scope.resolve("shop"), "name"))
        page_title = to_str(scope.resolve("page_title"))
        frame = {
            "content_for_layout": content,
            "content_for_header": build_content_for_header(shop_name, page_title),
        }

        with scope.pushed(frame):
            try:
                return self.processor.render_text(text, render_ctx.nested(path))
            except TemplateProcessingError as e:
                logger.warning(f"Error rendering layout '{layout_name}': {e}")
                return content

    # ---- группы секций ----

    def render_group(self, group: str, render_ctx: RenderContext) -> str:
        """
        Рендерит группу секций sections/GROUP.json.

        Отсутствующая группа даёт пустой вывод.

        Raises:
            DocumentError: Некорректный JSON группы
        """
        path = safe_join("sections", group, ".json")
        if path is None:
            return comment("Invalid section group name")

        document = self.load_document(path, path)
        if document is None:
            logger.warning(f"Section group '{group}' not found")
            return ""

        content, _ = self.render_sections(document, render_ctx.nested(path), group=group)
        return content


__all__ = [
    "PageAssembler",
    "RenderedDocument",
    "section_wrapper",
    "template_path",
    "DEFAULT_LAYOUT",
]
