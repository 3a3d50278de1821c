"""
JSON with comments.

Theme JSON files (template documents, schema blocks, settings) may carry
``//`` line comments, ``/* */`` block comments and a comment header; they
are removed before ``json.loads``. Comment markers inside string literals
are preserved.
"""

from __future__ import annotations

import json
import re
from typing import Any

_TOKEN_RE = re.compile(
    r'"(?:\\.|[^"\\])*"'   # string literal
    r"|//[^\n]*"           # line comment
    r"|/\*.*?\*/",         # block comment
    re.DOTALL,
)
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def strip_json_comments(text: str) -> str:
    """Removes comments, keeping string literals and line structure."""

    def replace(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith('"'):
            return token
        # Keep newlines so json error positions still point at the right line
        return "\n" * token.count("\n")

    return _TOKEN_RE.sub(replace, text)


def load_jsonc(text: str) -> Any:
    """
    Parses JSON that may contain comments and trailing commas.

    Raises:
        json.JSONDecodeError: When the remaining text is not valid JSON
    """
    stripped = strip_json_comments(text.lstrip("﻿"))
    return json.loads(_remove_trailing_commas(stripped))


def _remove_trailing_commas(text: str) -> str:
    parts = []
    last = 0
    # Only touch commas outside string literals
    for match in re.finditer(r'"(?:\\.|[^"\\])*"', text):
        parts.append(_TRAILING_COMMA_RE.sub(r"\1", text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(_TRAILING_COMMA_RE.sub(r"\1", text[last:]))
    return "".join(parts)


__all__ = ["strip_json_comments", "load_jsonc"]
