"""
Offline renderer for Liquid storefront themes.

Public entry point is ThemeEngine: it binds a theme source and renders
single sections or whole pages into HTML.
"""

from __future__ import annotations

from .engine import ThemeEngine
from .errors import LQUserError, DocumentError
from .page import RenderedDocument

__all__ = ["ThemeEngine", "LQUserError", "DocumentError", "RenderedDocument"]
