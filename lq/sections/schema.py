"""
Схема секции: извлечение, значения по умолчанию и проверка настроек.

Схема - JSON-тело последнего блока {% schema %} файла секции.
Комментарии JSON удаляются перед разбором; некорректный JSON
логируется и даёт пустую схему.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..theme.jsonc import load_jsonc
from ..values import Value, is_number, to_decimal

logger = logging.getLogger(__name__)

_SCHEMA_BLOCK_RE = re.compile(
    r"\{%-?\s*schema\s*-?%\}(.*?)\{%-?\s*endschema\s*-?%\}",
    re.DOTALL,
)
_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$|^rgba?\(")

# Типы настроек и их значения по умолчанию при отсутствии явного default
_TEXT_TYPES = {
    "text", "textarea", "richtext", "inline_richtext", "html", "url",
    "liquid", "select", "radio", "text_alignment",
}
_NIL_TYPES = {
    "image_picker", "video", "video_url", "product", "collection",
    "page", "blog", "article", "link_list",
}
_LIST_TYPES = {"product_list", "collection_list"}
_COLOR_TYPES = {"color", "color_background"}
_SIDEBAR_TYPES = {"header", "paragraph"}

DEFAULT_COLOR = "#000000"
DEFAULT_FONT = "assistant_n4"


@dataclass
class SectionSchema:
    """
    Разобранная схема секции.

    Attributes:
        name: Отображаемое имя секции (по умолчанию тип)
        settings: Определения настроек в порядке объявления
        blocks: Определения типов блоков
        presets: Пресеты секции
        enabled_on: Ограничение шаблонов, где секция доступна
        disabled_on: Шаблоны, где секция запрещена
        max_blocks: Предел числа блоков или None
        raw: Исходный словарь схемы
    """
    name: str = ""
    settings: List[Dict[str, Any]] = field(default_factory=list)
    blocks: List[Dict[str, Any]] = field(default_factory=list)
    presets: List[Dict[str, Any]] = field(default_factory=list)
    enabled_on: Optional[Dict[str, Any]] = None
    disabled_on: Optional[Dict[str, Any]] = None
    max_blocks: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], section_type: str = "") -> "SectionSchema":
        """Создаёт схему из словаря; поля неверного типа заменяются пустыми."""
        max_blocks = data.get("max_blocks")
        return cls(
            name=str(data.get("name") or section_type),
            settings=_dict_items(data.get("settings")),
            blocks=_dict_items(data.get("blocks")),
            presets=_dict_items(data.get("presets")),
            enabled_on=data.get("enabled_on") if isinstance(data.get("enabled_on"), dict) else None,
            disabled_on=data.get("disabled_on") if isinstance(data.get("disabled_on"), dict) else None,
            max_blocks=max_blocks if isinstance(max_blocks, int) and not isinstance(max_blocks, bool) else None,
            raw=data,
        )

    def default_settings(self) -> Dict[str, Value]:
        return default_settings(self.settings)

    def block_schema(self, block_type: str) -> Optional[Dict[str, Any]]:
        """Определение типа блока или None."""
        for block in self.blocks:
            if block.get("type") == block_type:
                return block
        return None

    def block_defaults(self, block_type: str) -> Dict[str, Value]:
        block = self.block_schema(block_type)
        if block is None:
            return {}
        return default_settings(_dict_items(block.get("settings")))


def _dict_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def extract_schema_text(source: str) -> Optional[str]:
    """Тело последнего блока schema или None."""
    matches = _SCHEMA_BLOCK_RE.findall(source)
    if not matches:
        return None
    return matches[-1]


def parse_schema(source: str, section_type: str = "") -> SectionSchema:
    """
    Извлекает и разбирает схему из исходного текста секции.

    Args:
        source: Текст файла секции
        section_type: Тип секции (для сообщений и имени по умолчанию)

    Returns:
        Схема; пустая при отсутствии блока или некорректном JSON
    """
    text = extract_schema_text(source)
    if text is None or not text.strip():
        return SectionSchema(name=section_type)

    try:
        data = load_jsonc(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Malformed schema JSON in section '{section_type}': {e}")
        return SectionSchema(name=section_type)

    if not isinstance(data, dict):
        logger.warning(f"Schema of section '{section_type}' is not a JSON object")
        return SectionSchema(name=section_type)

    return SectionSchema.from_dict(data, section_type)


def setting_default(setting: Dict[str, Any]) -> Value:
    """
    Значение настройки по умолчанию.

    Явный default побеждает; иначе значение определяется типом.
    """
    if "default" in setting:
        return setting["default"]

    setting_type = setting.get("type")
    if setting_type == "checkbox":
        return False
    if setting_type == "range":
        minimum = setting.get("min")
        return minimum if is_number(minimum) else 0
    if setting_type == "number":
        return 0
    if setting_type in ("select", "radio"):
        options = _dict_items(setting.get("options"))
        return options[0].get("value", "") if options else ""
    if setting_type in _TEXT_TYPES:
        return ""
    if setting_type in _COLOR_TYPES:
        return DEFAULT_COLOR
    if setting_type in _LIST_TYPES:
        return []
    if setting_type == "font_picker":
        return DEFAULT_FONT
    # _NIL_TYPES и неизвестные типы
    return None


def default_settings(definitions: List[Dict[str, Any]]) -> Dict[str, Value]:
    """Словарь id -> значение по умолчанию; header/paragraph пропускаются."""
    result: Dict[str, Value] = {}
    for setting in definitions:
        setting_id = setting.get("id")
        if not setting_id or setting.get("type") in _SIDEBAR_TYPES:
            continue
        result[str(setting_id)] = setting_default(setting)
    return result


def validate_settings(schema: SectionSchema, settings: Dict[str, Any]) -> List[str]:
    """
    Проверяет значения настроек секции по схеме.

    Returns:
        Список предупреждений (пустой, если всё корректно)
    """
    warnings: List[str] = []
    known = {str(s.get("id")): s for s in schema.settings if s.get("id")}

    for key, value in settings.items():
        definition = known.get(key)
        if definition is None:
            warnings.append(f"Unknown setting '{key}'")
            continue
        warnings.extend(_validate_value(key, definition, value))

    return warnings


def _validate_value(key: str, definition: Dict[str, Any], value: Any) -> List[str]:
    setting_type = definition.get("type")

    if setting_type in ("range", "number"):
        if value is None and setting_type == "number":
            return []
        if isinstance(value, bool) or not is_number(value):
            return [f"Setting '{key}' must be a number, got {value!r}"]
        problems = []
        number = to_decimal(value)
        minimum, maximum = definition.get("min"), definition.get("max")
        if is_number(minimum) and number < to_decimal(minimum):
            problems.append(f"Setting '{key}' is below minimum {minimum}: {value}")
        if is_number(maximum) and number > to_decimal(maximum):
            problems.append(f"Setting '{key}' is above maximum {maximum}: {value}")
        return problems

    if setting_type in ("select", "radio"):
        allowed = [option.get("value") for option in _dict_items(definition.get("options"))]
        if value not in allowed:
            return [f"Setting '{key}' must be one of {allowed}, got {value!r}"]
        return []

    if setting_type in _COLOR_TYPES:
        if value in (None, "") or (isinstance(value, str) and _COLOR_RE.match(value.strip())):
            return []
        return [f"Setting '{key}' is not a valid color: {value!r}"]

    if setting_type == "checkbox" and not isinstance(value, bool):
        return [f"Setting '{key}' must be true or false, got {value!r}"]

    return []


def can_use_in_template(schema: SectionSchema, template_name: str) -> bool:
    """
    Доступна ли секция в шаблоне (enabled_on/disabled_on).

    Имя шаблона сравнивается по типу: product.alternate -> product.
    """
    template_type = template_name.split(".", 1)[0]
    if schema.enabled_on is not None:
        templates = schema.enabled_on.get("templates") or []
        if "*" not in templates and template_type not in templates:
            return False
    if schema.disabled_on is not None:
        templates = schema.disabled_on.get("templates") or []
        if "*" in templates or template_type in templates:
            return False
    return True


__all__ = [
    "SectionSchema",
    "extract_schema_text",
    "parse_schema",
    "setting_default",
    "default_settings",
    "validate_settings",
    "can_use_in_template",
]
