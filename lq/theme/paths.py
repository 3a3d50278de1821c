"""
Path safety for theme lookups.

Every user-influenced name (section type, snippet name, layout, locale) is
reduced to a single file-name component before it is joined to a theme
directory: ``..`` sequences, path separators and characters invalid in file
names are removed, as are leading dots.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_DOT_RUN_RE = re.compile(r"\.{2,}")
_UNSAFE_CHARS_RE = re.compile(r'[\\/<>:"|?*\x00-\x1f]')


def sanitize_name(name: object) -> str:
    """
    Reduces a name to a safe single path component.

    Returns an empty string when nothing usable is left.
    """
    if not isinstance(name, str) or not name:
        return ""

    safe = _DOT_RUN_RE.sub("", name)
    safe = _UNSAFE_CHARS_RE.sub("", safe)
    safe = safe.lstrip(".").strip()

    if ".." in name or "/" in name or "\\" in name:
        logger.warning(f"[Security] Path traversal attempt blocked: {name!r} -> {safe!r}")

    return safe


def safe_join(directory: str, name: object, suffix: str = "") -> Optional[str]:
    """
    Builds ``directory/NAME{suffix}`` from a sanitized name.

    Returns:
        Logical theme path or None when the name sanitizes to nothing
    """
    safe = sanitize_name(name)
    if not safe:
        return None
    return f"{directory}/{safe}{suffix}"


__all__ = ["sanitize_name", "safe_join"]
