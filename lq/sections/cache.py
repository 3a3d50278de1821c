"""
Per-engine cache of parsed section schemas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .schema import SectionSchema, parse_schema
from ..theme.paths import safe_join
from ..theme.source import ThemeSource

logger = logging.getLogger(__name__)

SECTIONS_DIR = "sections"
SECTION_SUFFIX = ".liquid"


@dataclass(frozen=True)
class SectionInfo:
    """Summary of one section type for listings."""
    type: str
    name: str
    settings_count: int
    blocks_count: int
    presets_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type,
            "name": self.name,
            "settings": self.settings_count,
            "blocks": self.blocks_count,
            "presets": self.presets_count,
        }


class SchemaCache:
    """
    Lazily parsed section schemas keyed by section type.

    Entries live as long as the engine stays bound to the same theme source;
    rebinding the engine drops the cache.
    """

    def __init__(self, source: ThemeSource):
        self._source = source
        # Cache: section type -> parsed schema
        self._cache: Dict[str, SectionSchema] = {}

    def get(self, section_type: str, source_text: Optional[str] = None) -> Optional[SectionSchema]:
        """
        Schema for a section type.

        Args:
            section_type: Section type (file name without extension)
            source_text: Section file text if the caller already loaded it

        Returns:
            Parsed schema, or None when the section file does not exist
        """
        if section_type in self._cache:
            logger.debug(f"Schema cache hit: {section_type}")
            return self._cache[section_type]

        if source_text is None:
            path = safe_join(SECTIONS_DIR, section_type, SECTION_SUFFIX)
            source_text = self._source.get_file(path) if path else None
            if source_text is None:
                return None

        schema = parse_schema(source_text, section_type)
        self._cache[section_type] = schema
        return schema

    def clear(self) -> None:
        """Clear all cached schemas."""
        self._cache.clear()

    def __contains__(self, section_type: str) -> bool:
        return section_type in self._cache

    def list_sections(self) -> List[SectionInfo]:
        """All section types of the theme, sorted by type."""
        prefix = f"{SECTIONS_DIR}/"
        result: List[SectionInfo] = []
        for path in self._source.list_files(prefix):
            file_name = path[len(prefix):]
            if "/" in file_name or not file_name.endswith(SECTION_SUFFIX):
                continue
            section_type = file_name[:-len(SECTION_SUFFIX)]
            schema = self.get(section_type)
            if schema is None:
                continue
            result.append(SectionInfo(
                type=section_type,
                name=schema.name,
                settings_count=len(schema.settings),
                blocks_count=len(schema.blocks),
                presets_count=len(schema.presets),
            ))
        return result


__all__ = ["SchemaCache", "SectionInfo", "SECTIONS_DIR", "SECTION_SUFFIX"]
