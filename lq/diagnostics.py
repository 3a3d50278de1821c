"""
Diagnostic markers.

Recovered faults never abort a render pass: they are replaced with an HTML
comment that is invisible in the page but can be inspected in its source.
"""

from __future__ import annotations


def comment(message: str) -> str:
    """Wraps a message into an HTML comment, neutralizing a premature terminator."""
    safe = str(message).replace("-->", "-- >")
    return f"<!-- {safe} -->"


__all__ = ["comment"]
