"""
Модель конфигурации движка (lq.yaml).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..errors import ThemeConfigError

CONFIG_FILE_NAME = "lq.yaml"


@dataclass
class EngineConfig:
    """
    Настройки движка рендеринга темы.

    default_locale=None означает: локаль из файла *.default.json, иначе "en".
    """
    default_locale: Optional[str] = None
    max_render_depth: int = 50
    money_format: str = "${{amount}}"
    currency: str = "USD"
    design_mode: bool = True
    shop_domain: str = "my-store.myshopify.com"
    asset_url_prefix: str = "/theme-assets/"
    file_url_prefix: str = "/theme-files/"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Создание экземпляра из словаря (из YAML). Неизвестные ключи запрещены."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ThemeConfigError(f"Unknown keys in {CONFIG_FILE_NAME}: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key, raw in data.items():
            values[key] = _coerce(key, raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        result: Dict[str, Any] = {f.name: getattr(self, f.name) for f in fields(self)}
        if result["default_locale"] is None:
            del result["default_locale"]
        return result


def _coerce(key: str, raw: Any) -> Any:
    """Проверяет тип значения ключа конфигурации."""
    if key == "max_render_depth":
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            raise ThemeConfigError(f"{CONFIG_FILE_NAME}: max_render_depth must be a positive integer, got {raw!r}")
        return raw
    if key == "design_mode":
        if not isinstance(raw, bool):
            raise ThemeConfigError(f"{CONFIG_FILE_NAME}: design_mode must be true or false, got {raw!r}")
        return raw
    if key == "default_locale" and raw is None:
        return None
    if not isinstance(raw, str):
        raise ThemeConfigError(f"{CONFIG_FILE_NAME}: {key} must be a string, got {raw!r}")
    return raw


__all__ = ["EngineConfig", "CONFIG_FILE_NAME"]
