"""
Color and font filters.

Format conversions parse ``#rgb``, ``#rrggbb`` and ``rgb()/rgba()`` input and
re-express the same color. Manipulations (lighten, darken, mix, ...) and font
modifiers have no design-token backend here: they return their input
unchanged. Unparsable colors always pass through.
"""

from __future__ import annotations

import colorsys
import re
from typing import Dict, Optional, Tuple

from .registry import FilterFunc
from ..values import Value, as_dict, to_str

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_SHORT_HEX_RE = re.compile(r"^#?([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
_RGB_RE = re.compile(r"rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)", re.IGNORECASE)

RGB = Tuple[int, int, int]


def parse_color(value: Value) -> Optional[RGB]:
    text = to_str(value).strip()
    if not text:
        return None
    match = _HEX_RE.match(text)
    if match:
        return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]
    match = _SHORT_HEX_RE.match(text)
    if match:
        return tuple(int(part * 2, 16) for part in match.groups())  # type: ignore[return-value]
    match = _RGB_RE.search(text)
    if match:
        return tuple(min(int(part), 255) for part in match.groups())  # type: ignore[return-value]
    return None


def to_hsl(rgb: RGB) -> Tuple[int, int, int]:
    """Hue in degrees, saturation and lightness in percent."""
    h, l, s = colorsys.rgb_to_hls(*(channel / 255 for channel in rgb))
    return round(h * 360), round(s * 100), round(l * 100)


def color_to_rgb(value: Value) -> Value:
    rgb = parse_color(value)
    if rgb is None:
        return value
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"


def color_to_hex(value: Value) -> Value:
    rgb = parse_color(value)
    if rgb is None:
        return value
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def color_to_hsl(value: Value) -> Value:
    rgb = parse_color(value)
    if rgb is None:
        return value
    h, s, l = to_hsl(rgb)
    return f"hsl({h}, {s}%, {l}%)"


def color_extract(value: Value, component: Value = None) -> int:
    rgb = parse_color(value)
    if rgb is None:
        return 0
    name = to_str(component)
    channels = {"red": rgb[0], "green": rgb[1], "blue": rgb[2]}
    if name in channels:
        return channels[name]
    h, s, l = to_hsl(rgb)
    return {"hue": h, "saturation": s, "lightness": l}.get(name, 0)


def color_brightness(value: Value) -> int:
    rgb = parse_color(value)
    if rgb is None:
        return 0
    r, g, b = rgb
    return round((r * 299 + g * 587 + b * 114) / 1000)


def _passthrough(value: Value, *args: Value, **kwargs: Value) -> Value:
    return value


def font_face(font: Value, *args: Value, **kwargs: Value) -> str:
    if not font:
        return ""
    family = as_dict(font).get("family") or (font if isinstance(font, str) else "sans-serif")
    return f'@font-face {{ font-family: "{to_str(family)}"; }}'


FILTERS: Dict[str, FilterFunc] = {
    "color_to_rgb": color_to_rgb,
    "color_to_hex": color_to_hex,
    "color_to_hsl": color_to_hsl,
    "color_extract": color_extract,
    "color_brightness": color_brightness,
    "color_lighten": _passthrough,
    "color_darken": _passthrough,
    "color_saturate": _passthrough,
    "color_desaturate": _passthrough,
    "color_modify": _passthrough,
    "color_mix": _passthrough,
    "color_contrast": _passthrough,
    "font_face": font_face,
    "font_modify": _passthrough,
    "font_url": _passthrough,
}


__all__ = ["FILTERS", "parse_color"]
