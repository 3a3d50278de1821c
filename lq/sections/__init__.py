"""
Section schemas and the section renderer.
"""

from __future__ import annotations

from .cache import SchemaCache, SectionInfo, SECTIONS_DIR, SECTION_SUFFIX
from .renderer import SectionRenderer, build_blocks, build_section_object
from .schema import (
    SectionSchema,
    can_use_in_template,
    default_settings,
    extract_schema_text,
    parse_schema,
    setting_default,
    validate_settings,
)

__all__ = [
    "SchemaCache",
    "SectionInfo",
    "SECTIONS_DIR",
    "SECTION_SUFFIX",
    "SectionRenderer",
    "build_blocks",
    "build_section_object",
    "SectionSchema",
    "can_use_in_template",
    "default_settings",
    "extract_schema_text",
    "parse_schema",
    "setting_default",
    "validate_settings",
]
