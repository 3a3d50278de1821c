"""
String filters.

Non-string input is stringified first (nil becomes ""), so every filter
here accepts any Value.
"""

from __future__ import annotations

import html
import re
from typing import Dict, List

from .registry import FilterFunc
from ..jsonic import dumps
from ..values import Value, is_number, to_int, to_str, values_equal

_TAG_RE = re.compile(r"<script.*?</script>|<style.*?</style>|<!--.*?-->|<[^>]*>", re.DOTALL | re.IGNORECASE)
_HANDLE_RE = re.compile(r"[^a-z0-9]+")


def append(value: Value, suffix: Value = None) -> str:
    return to_str(value) + to_str(suffix)


def prepend(value: Value, prefix: Value = None) -> str:
    return to_str(prefix) + to_str(value)


def remove(value: Value, part: Value = None) -> str:
    text, needle = to_str(value), to_str(part)
    return text.replace(needle, "") if needle else text


def remove_first(value: Value, part: Value = None) -> str:
    text, needle = to_str(value), to_str(part)
    return text.replace(needle, "", 1) if needle else text


def remove_last(value: Value, part: Value = None) -> str:
    return replace_last(value, part, "")


def replace(value: Value, old: Value = None, new: Value = None) -> str:
    text, needle = to_str(value), to_str(old)
    return text.replace(needle, to_str(new)) if needle else text


def replace_first(value: Value, old: Value = None, new: Value = None) -> str:
    text, needle = to_str(value), to_str(old)
    return text.replace(needle, to_str(new), 1) if needle else text


def replace_last(value: Value, old: Value = None, new: Value = None) -> str:
    text, needle = to_str(value), to_str(old)
    index = text.rfind(needle) if needle else -1
    if index < 0:
        return text
    return text[:index] + to_str(new) + text[index + len(needle):]


def strip(value: Value) -> str:
    return to_str(value).strip()


def lstrip(value: Value) -> str:
    return to_str(value).lstrip()


def rstrip(value: Value) -> str:
    return to_str(value).rstrip()


def strip_html(value: Value) -> str:
    return _TAG_RE.sub("", to_str(value))


def strip_newlines(value: Value) -> str:
    return to_str(value).replace("\r", "").replace("\n", "")


def newline_to_br(value: Value) -> str:
    return to_str(value).replace("\r\n", "\n").replace("\n", "<br />\n")


def escape(value: Value) -> Value:
    if value is None:
        return None
    return html.escape(to_str(value))


def escape_once(value: Value) -> str:
    return html.escape(html.unescape(to_str(value)))


def truncate(value: Value, length: Value = 50, ellipsis: Value = "...") -> str:
    """Shortens to `length` characters including the ellipsis."""
    text, tail = to_str(value), to_str(ellipsis)
    limit = to_int(length, 50)
    if len(text) <= limit:
        return text
    return text[:max(limit - len(tail), 0)] + tail


def truncatewords(value: Value, words: Value = 15, ellipsis: Value = "...") -> str:
    text = to_str(value)
    limit = max(to_int(words, 15), 1)
    parts = text.split()
    if len(parts) <= limit:
        return text
    return " ".join(parts[:limit]) + to_str(ellipsis)


def split(value: Value, separator: Value = " ") -> List[str]:
    text, sep = to_str(value), to_str(separator)
    if not text:
        return []
    if sep == " ":
        return text.split()
    if not sep:
        return list(text)
    return text.split(sep)


def slice_(value: Value, start: Value = 0, length: Value = 1) -> Value:
    """Substring or sub-list; a negative start counts from the end."""
    begin, count = to_int(start), max(to_int(length, 1), 0)
    items = value if isinstance(value, list) else to_str(value)
    if begin < 0:
        begin = max(len(items) + begin, 0)
    return items[begin:begin + count]


def upcase(value: Value) -> str:
    return to_str(value).upper()


def downcase(value: Value) -> str:
    return to_str(value).lower()


def capitalize(value: Value) -> str:
    text = to_str(value)
    return text[:1].upper() + text[1:]


def handleize(value: Value) -> str:
    return _HANDLE_RE.sub("-", to_str(value).lower()).strip("-")


def camelize(value: Value) -> str:
    parts = re.split(r"[^A-Za-z0-9]+", to_str(value))
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def pluralize(count: Value, singular: Value = "", plural: Value = "") -> str:
    return to_str(singular) if values_equal(count, 1) else to_str(plural)


def size(value: Value) -> int:
    if isinstance(value, (str, list, dict)):
        return len(value)
    if is_number(value):
        return len(to_str(value))
    return 0


def default(value: Value, fallback: Value = None, allow_false: Value = False) -> Value:
    """Replaces nil, false, empty strings and empty collections."""
    if value is False and allow_false is True:
        return value
    if value is None or value is False or value == "" or value == [] or value == {}:
        return fallback
    return value


def json(value: Value) -> str:
    return dumps(value)


FILTERS: Dict[str, FilterFunc] = {
    "append": append,
    "prepend": prepend,
    "remove": remove,
    "remove_first": remove_first,
    "remove_last": remove_last,
    "replace": replace,
    "replace_first": replace_first,
    "replace_last": replace_last,
    "strip": strip,
    "lstrip": lstrip,
    "rstrip": rstrip,
    "strip_html": strip_html,
    "strip_newlines": strip_newlines,
    "newline_to_br": newline_to_br,
    "escape": escape,
    "escape_once": escape_once,
    "truncate": truncate,
    "truncatewords": truncatewords,
    "split": split,
    "slice": slice_,
    "upcase": upcase,
    "downcase": downcase,
    "capitalize": capitalize,
    "handle": handleize,
    "handleize": handleize,
    "camelize": camelize,
    "pluralize": pluralize,
    "size": size,
    "default": default,
    "json": json,
}


__all__ = ["FILTERS", "handleize", "truncate", "escape"]
