"""
Locale resolution for the t filter.
"""

from __future__ import annotations

from .resolver import LocaleResolver, LOCALES_DIR, substitute

__all__ = ["LocaleResolver", "LOCALES_DIR", "substitute"]
