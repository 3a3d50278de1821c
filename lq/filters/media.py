"""
Image, video and media filters.

Image sources may be plain URL strings or objects with ``src``/``url``.
Named Shopify sizes (``pico`` ... ``grande``) map to fixed dimensions;
``master``/``original`` keep the source untouched.
"""

from __future__ import annotations

import re
from html import escape
from typing import Dict, Optional

from .dates import parse_date
from .registry import FilterFunc
from ..values import Value, as_dict, to_str

PLACEHOLDER_IMAGE = "/placeholder.jpg"

SIZE_MAP: Dict[str, str] = {
    "pico": "16x16",
    "icon": "32x32",
    "thumb": "50x50",
    "small": "100x100",
    "compact": "160x160",
    "medium": "240x240",
    "large": "480x480",
    "grande": "600x600",
}

_EXTENSION_RE = re.compile(r"(\.[a-z]+)(\?.*)?$", re.IGNORECASE)

PLACEHOLDER_SVG = (
    '<svg class="placeholder-svg" viewBox="0 0 100 100">'
    '<rect fill="#f0f0f0" width="100" height="100"/></svg>'
)


def _attr(value: Value) -> str:
    return escape(to_str(value), quote=True)


def image_source(image: Value) -> Optional[str]:
    if isinstance(image, str):
        return image or None
    fields = as_dict(image)
    source = fields.get("src") or fields.get("url")
    return to_str(source) if source else None


def _with_query(source: str, query: str) -> str:
    separator = "&" if "?" in source else "?"
    return f"{source}{separator}{query}"


def img_url(image: Value, size: Value = None) -> str:
    source = image_source(image)
    if source is None:
        return PLACEHOLDER_IMAGE

    name = to_str(size)
    if not name or name in ("master", "original"):
        return source
    dimensions = SIZE_MAP.get(name, name)

    if "cdn.shopify.com" in source or "shopifycdn.com" in source:
        match = _EXTENSION_RE.search(source)
        if match:
            suffix = f"_{dimensions}{match.group(1)}{match.group(2) or ''}"
            return source[:match.start()] + suffix
    return _with_query(source, f"size={dimensions}")


def image_url(image: Value, *args: Value, **kwargs: Value) -> str:
    source = image_source(image)
    if source is None:
        return PLACEHOLDER_IMAGE
    params = [f"{key}={to_str(kwargs[key])}" for key in ("width", "height", "crop", "format") if kwargs.get(key)]
    if not params:
        return source
    return _with_query(source, "&".join(params))


def img_tag(value: Value, alt: Value = None, css_class: Value = None) -> str:
    return f'<img src="{_attr(value)}" alt="{_attr(alt)}" class="{_attr(css_class)}" loading="lazy">'


def image_tag(value: Value, *args: Value, **kwargs: Value) -> str:
    source = image_source(value) or PLACEHOLDER_IMAGE
    parts = [f'src="{_attr(source)}"', f'alt="{_attr(kwargs.get("alt"))}"', f'class="{_attr(kwargs.get("class"))}"']
    for key in ("width", "height", "sizes", "srcset"):
        if kwargs.get(key):
            parts.append(f'{key}="{_attr(kwargs[key])}"')
    parts.append(f'loading="{_attr(kwargs.get("loading") or "lazy")}"')
    return f"<img {' '.join(parts)}>"


def placeholder_svg_tag(value: Value = None, *args: Value) -> str:
    return PLACEHOLDER_SVG


def external_video_url(video: Value, *args: Value, **kwargs: Value) -> str:
    if isinstance(video, str):
        return video
    return to_str(as_dict(video).get("url"))


def external_video_tag(video: Value, *args: Value, **kwargs: Value) -> str:
    if not video:
        return ""
    return f'<iframe src="{_attr(external_video_url(video))}" frameborder="0" allowfullscreen></iframe>'


def video_tag(video: Value, *args: Value, **kwargs: Value) -> str:
    if not video:
        return ""
    fields = as_dict(video)
    sources = fields.get("sources") or []
    source = fields.get("url") or (as_dict(sources[0]).get("url") if sources else None) or video
    controls = " controls" if kwargs.get("controls") else ""
    return f'<video src="{_attr(image_source(source) or "")}"{controls} playsinline></video>'


def media_tag(media: Value, *args: Value, **kwargs: Value) -> str:
    fields = as_dict(media)
    if fields.get("media_type") == "image":
        return f'<img src="{_attr(image_source(fields))}" alt="{_attr(fields.get("alt"))}">'
    if fields.get("media_type") == "external_video":
        return external_video_tag(fields)
    if fields.get("media_type") == "video":
        return video_tag(fields)
    return ""


def time_tag(value: Value, fmt: Value = None) -> Value:
    moment = parse_date(value)
    if moment is None:
        return value
    label = moment.strftime(to_str(fmt) or "%b %d, %Y")
    return f'<time datetime="{moment.isoformat()}">{label}</time>'


def metafield_text(metafield: Value) -> str:
    if isinstance(metafield, dict):
        return to_str(metafield.get("value"))
    return to_str(metafield)


def metafield_tag(metafield: Value) -> str:
    return metafield_text(metafield)


FILTERS: Dict[str, FilterFunc] = {
    "img_url": img_url,
    "image_url": image_url,
    "img_tag": img_tag,
    "image_tag": image_tag,
    "placeholder_svg_tag": placeholder_svg_tag,
    "external_video_url": external_video_url,
    "external_video_tag": external_video_tag,
    "video_tag": video_tag,
    "media_tag": media_tag,
    "time_tag": time_tag,
    "metafield_tag": metafield_tag,
    "metafield_text": metafield_text,
}


__all__ = ["FILTERS", "SIZE_MAP", "PLACEHOLDER_SVG", "img_url"]
