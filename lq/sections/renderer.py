"""
Рендеринг одной секции.

Секция рендерится в изолированной области видимости: в ней видны
только объект section, block = nil, нижний фрейм прохода и глобальные
объекты витрины.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Dict, List, Mapping, Optional

from .cache import SECTIONS_DIR, SECTION_SUFFIX, SchemaCache
from .schema import SectionSchema
from ..diagnostics import comment
from ..template import RenderContext, TemplateProcessingError, TemplateProcessor
from ..theme.paths import safe_join
from ..theme.source import ThemeSource
from ..values import Value, as_dict

logger = logging.getLogger(__name__)


def build_blocks(schema: SectionSchema, instance: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Упорядоченный список блоков секции.

    Порядок задаёт block_order; идентификаторы без записи в blocks
    пропускаются, отключённые блоки не выводятся. Без block_order
    используется порядок ключей blocks.
    """
    blocks = as_dict(instance.get("blocks"))
    block_order = instance.get("block_order")
    if not isinstance(block_order, list):
        block_order = list(blocks)

    result: List[Dict[str, Any]] = []
    for block_id in block_order:
        block = blocks.get(block_id) if isinstance(block_id, str) else None
        if not isinstance(block, dict):
            logger.debug(f"Block '{block_id}' listed in block_order has no entry in blocks, skipped")
            continue
        if block.get("disabled") is True:
            continue

        block_type = str(block.get("type") or "")
        settings = dict(schema.block_defaults(block_type))
        settings.update(as_dict(block.get("settings")))
        result.append({
            "id": block_id,
            "type": block_type,
            "settings": settings,
            "shopify_attributes": f'data-block-id="{html.escape(block_id)}"',
        })
    return result


def build_section_object(
    section_type: str,
    schema: SectionSchema,
    instance: Mapping[str, Any],
) -> Dict[str, Value]:
    """
    Объект section для шаблона.

    Настройки - значения схемы по умолчанию, перекрытые значениями вызова.
    """
    settings = schema.default_settings()
    settings.update(as_dict(instance.get("settings")))

    blocks = build_blocks(schema, instance)
    return {
        "id": str(instance.get("id") or f"section-{section_type}"),
        "type": section_type,
        "settings": settings,
        "blocks": blocks,
        "block_order": [block["id"] for block in blocks],
    }


class SectionRenderer:
    """
    Рендерер секций темы.

    Схемы берутся из общего кэша движка; каждый вызов получает
    изолированную область поверх области вызывающего прохода.
    """

    def __init__(self, source: ThemeSource, schemas: SchemaCache, processor: TemplateProcessor):
        self.source = source
        self.schemas = schemas
        self.processor = processor

    def render(self, section_type: str, instance: Optional[Mapping[str, Any]], render_ctx: RenderContext) -> str:
        """
        Рендерит секцию.

        Args:
            section_type: Тип секции (имя файла в sections/)
            instance: Данные экземпляра (id, settings, blocks, block_order, disabled)
            render_ctx: Контекст вызывающего прохода

        Returns:
            HTML секции или диагностический комментарий
        """
        instance = instance or {}
        if instance.get("disabled") is True:
            return ""

        path = safe_join(SECTIONS_DIR, section_type, SECTION_SUFFIX)
        if path is None:
            logger.warning(f"Invalid section type {section_type!r}")
            return comment("Invalid section name")
        safe_type = path[len(SECTIONS_DIR) + 1:-len(SECTION_SUFFIX)]

        text = self.source.get_file(path)
        if text is None:
            logger.warning(f"Section '{safe_type}' not found")
            return comment(f"Section not found: {safe_type}")

        schema = self.schemas.get(safe_type, text)
        section = build_section_object(safe_type, schema, instance)

        scope = render_ctx.scope.isolated({"section": section, "block": None})
        try:
            output = self.processor.render_text(text, render_ctx.nested(path, scope))
        except TemplateProcessingError as e:
            logger.warning(f"Error rendering section '{safe_type}': {e}")
            return comment(f"Section Render Error: {safe_type}: {e}")

        logger.debug(f"Rendered section '{section['id']}' ({safe_type}), {len(section['blocks'])} blocks")
        return output


__all__ = ["SectionRenderer", "build_section_object", "build_blocks"]
