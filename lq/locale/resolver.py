"""
Разрешение ключей локализации для фильтра t.

Локали загружаются из locales/NAME.json источника темы. Файл
NAME.default.json объявляет локаль по умолчанию, файлы *.schema.json
(переводы редактора) пропускаются.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional

from ..theme.jsonc import load_jsonc
from ..theme.source import ThemeSource
from ..values import Value, to_str

logger = logging.getLogger(__name__)

LOCALES_DIR = "locales"
DEFAULT_SUFFIX = ".default.json"
SCHEMA_SUFFIX = ".schema.json"

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")


class LocaleResolver:
    """
    Переводы темы с цепочкой отката.

    Порядок поиска ключа: запрошенная локаль, локаль по умолчанию,
    первая доступная локаль; если ключ не найден нигде, возвращается
    последний сегмент ключа.
    """

    def __init__(self, locales: Mapping[str, Dict[str, Any]], default_locale: Optional[str] = None):
        """
        Args:
            locales: Имя локали -> дерево переводов
            default_locale: Локаль по умолчанию (None: первая доступная)
        """
        self.locales: Dict[str, Dict[str, Any]] = dict(locales)
        self.default_locale = default_locale

    @classmethod
    def from_source(cls, source: ThemeSource, default_locale: Optional[str] = None) -> "LocaleResolver":
        """
        Загружает все локали темы.

        Некорректный JSON логируется, локаль пропускается.

        Args:
            source: Источник файлов темы
            default_locale: Явная локаль по умолчанию (перекрывает *.default.json)
        """
        locales: Dict[str, Dict[str, Any]] = {}
        declared_default: Optional[str] = None

        for path in source.list_files(f"{LOCALES_DIR}/"):
            file_name = path[len(LOCALES_DIR) + 1:]
            if "/" in file_name or not file_name.endswith(".json") or file_name.endswith(SCHEMA_SUFFIX):
                continue

            if file_name.endswith(DEFAULT_SUFFIX):
                name = file_name[:-len(DEFAULT_SUFFIX)]
                declared_default = name
            else:
                name = file_name[:-len(".json")]

            text = source.get_file(path)
            if text is None:
                continue
            try:
                data = load_jsonc(text)
            except json.JSONDecodeError as e:
                logger.warning(f"Malformed locale file '{path}': {e}")
                continue
            if not isinstance(data, dict):
                logger.warning(f"Locale file '{path}' is not a JSON object, skipped")
                continue
            locales[name] = data

        logger.debug(f"Loaded locales: {sorted(locales)} (default: {declared_default})")
        return cls(locales, default_locale or declared_default)

    @property
    def available(self) -> List[str]:
        return list(self.locales)

    def _fallback_chain(self, locale: Optional[str]) -> List[str]:
        chain: List[str] = []
        for name in (locale, self.default_locale, next(iter(self.locales), None)):
            if name and name in self.locales and name not in chain:
                chain.append(name)
        return chain

    def resolve(self, key: str, locale: Optional[str] = None) -> Value:
        """Сырое значение ключа (строка или словарь форм) или nil."""
        for name in self._fallback_chain(locale):
            value = _lookup_path(self.locales[name], key)
            if isinstance(value, (str, dict)):
                return value
        return None

    def translate(self, key: str, locale: Optional[str] = None,
                  substitutions: Optional[Mapping[str, Value]] = None) -> str:
        """
        Переводит ключ с подстановкой {{ name }}.

        Неразрешённые подстановки остаются как есть. Аргумент count
        выбирает форму one/other, если значение ключа является словарём.
        """
        subs = dict(substitutions or {})
        value = self.resolve(key, locale)

        if isinstance(value, dict):
            value = _plural_form(value, subs.get("count"))
        if not isinstance(value, str):
            logger.debug(f"Translation missing for '{key}' ({locale or self.default_locale})")
            return key.split(".")[-1]

        return substitute(value, subs)


def _lookup_path(tree: Dict[str, Any], key: str) -> Value:
    value: Value = tree
    for part in key.split("."):
        value = value.get(part) if isinstance(value, dict) else None
        if value is None:
            return None
    return value


def _plural_form(forms: Dict[str, Any], count: Value) -> Value:
    if count is not None and to_str(count) in ("1", "1.0"):
        return forms.get("one", forms.get("other"))
    return forms.get("other", forms.get("one"))


def substitute(text: str, substitutions: Mapping[str, Value]) -> str:
    """Заменяет {{ name }} строковым значением аргумента."""

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in substitutions:
            return match.group(0)
        return to_str(substitutions[name])

    return _PLACEHOLDER_RE.sub(replace, text)


__all__ = ["LocaleResolver", "substitute", "LOCALES_DIR"]
