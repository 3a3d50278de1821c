from __future__ import annotations

from importlib import metadata

DISTRIBUTION = "liquid-preview"
# Версия рабочей копии, которая не установлена через pip
UNINSTALLED_VERSION = "0.0.0+local"


def tool_version() -> str:
    """Версия установленного дистрибутива liquid-preview."""
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return UNINSTALLED_VERSION


__all__ = ["tool_version", "DISTRIBUTION"]
