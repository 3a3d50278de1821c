"""
Загрузчик конфигурации движка из корня темы.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CONFIG_FILE_NAME, EngineConfig
from ..errors import ThemeConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ThemeConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ThemeConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_engine_config(theme_root: Path) -> EngineConfig:
    """
    Загружает lq.yaml из корня темы.

    Отсутствующий файл даёт конфигурацию по умолчанию.

    Raises:
        ThemeConfigError: Некорректный YAML или неизвестные ключи
    """
    path = theme_root / CONFIG_FILE_NAME
    if not path.is_file():
        logger.debug(f"No {CONFIG_FILE_NAME} in {theme_root}, using defaults")
        return EngineConfig()
    return EngineConfig.from_dict(_read_yaml_map(path))


__all__ = ["load_engine_config"]
