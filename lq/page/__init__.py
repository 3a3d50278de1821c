"""
Page assembly and preview globals.
"""

from __future__ import annotations

from .assembler import DEFAULT_LAYOUT, PageAssembler, RenderedDocument, section_wrapper, template_path
from .preview import SHOP_NAME, build_content_for_header, build_preview_globals

__all__ = [
    "DEFAULT_LAYOUT",
    "PageAssembler",
    "RenderedDocument",
    "section_wrapper",
    "template_path",
    "SHOP_NAME",
    "build_content_for_header",
    "build_preview_globals",
]
