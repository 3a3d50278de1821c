"""
Date filter.

Accepts ISO-8601 strings, Unix timestamps (seconds) and the special inputs
"now"/"today". Input that is not a date passes through unchanged.
"""

from __future__ import annotations

import logging
from datetime import date as _date, datetime, timezone
from typing import Dict, Optional

from .registry import FilterFunc
from ..values import Value, is_number, to_str

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%Y-%m-%d"


def parse_date(value: Value) -> Optional[datetime]:
    """Converts a template value to datetime, or None when it is not a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, _date):
        return datetime(value.year, value.month, value.day)
    if is_number(value):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)  # type: ignore[arg-type]

    text = to_str(value).strip()
    if not text:
        return None
    if text.lower() in ("now", "today"):
        return datetime.now()
    if text.isdigit():
        return datetime.fromtimestamp(int(text), tz=timezone.utc)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def date(value: Value, fmt: Value = None) -> Value:
    moment = parse_date(value)
    if moment is None:
        logger.debug(f"date: '{to_str(value)}' is not a date, passed through")
        return value
    return moment.strftime(to_str(fmt) or DEFAULT_FORMAT)


FILTERS: Dict[str, FilterFunc] = {
    "date": date,
}


__all__ = ["FILTERS", "parse_date", "DEFAULT_FORMAT"]
