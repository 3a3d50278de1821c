"""
Theme file access: source stores, path safety and JSON-with-comments.
"""

from __future__ import annotations

from .jsonc import load_jsonc, strip_json_comments
from .paths import safe_join, sanitize_name
from .source import FilesystemThemeSource, MemoryThemeSource, ThemeSource, normalize_path

__all__ = [
    "ThemeSource",
    "FilesystemThemeSource",
    "MemoryThemeSource",
    "normalize_path",
    "safe_join",
    "sanitize_name",
    "load_jsonc",
    "strip_json_comments",
]
