"""
Утилиты для создания файлов и директорий в тестах.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи

    Returns:
        Путь к созданному файлу
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_tree(root: Path, files: Mapping[str, str]) -> Path:
    """Записывает набор файлов {относительный путь: текст} под root."""
    for rel, text in files.items():
        write(root / rel, text)
    return root


__all__ = ["write", "write_tree"]
