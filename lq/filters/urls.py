"""
URL, asset and HTML tag filters.
"""

from __future__ import annotations

from html import escape
from typing import Dict

from .registry import FilterFunc
from ..values import Value, as_dict, to_str

SHOPIFY_ASSET_CDN = "https://cdn.shopify.com/shopifycloud/shopify/assets/"


def _attr(value: Value) -> str:
    return escape(to_str(value), quote=True)


def create_url_filters(asset_prefix: str = "/theme-assets/", file_prefix: str = "/theme-files/") -> Dict[str, FilterFunc]:
    """Builds the asset/file URL filters for the configured URL prefixes."""

    def asset_url(value: Value) -> str:
        return asset_prefix + to_str(value)

    def asset_img_url(value: Value, size: Value = None) -> str:
        return asset_prefix + to_str(value)

    def file_url(value: Value) -> str:
        return file_prefix + to_str(value)

    def file_img_url(value: Value, size: Value = None) -> str:
        return file_prefix + to_str(value)

    return {
        "asset_url": asset_url,
        "asset_img_url": asset_img_url,
        "global_asset_url": asset_url,
        "file_url": file_url,
        "file_img_url": file_img_url,
    }


def shopify_asset_url(value: Value) -> str:
    return SHOPIFY_ASSET_CDN + to_str(value)


def url(value: Value) -> str:
    """A string is already a URL; objects provide url or handle."""
    if isinstance(value, str):
        return value
    fields = as_dict(value)
    return to_str(fields.get("url") or fields.get("handle") or "#")


def link_to(text: Value, href: Value = None, *args: Value, **kwargs: Value) -> str:
    css_class = kwargs.get("class", "")
    title = kwargs.get("title")
    title_attr = f' title="{_attr(title)}"' if title else ""
    return f'<a href="{_attr(href)}" class="{_attr(css_class)}"{title_attr}>{to_str(text)}</a>'


def link_to_tag(tag: Value, href: Value = None) -> str:
    target = to_str(href) or f"/tags/{to_str(tag)}"
    return f'<a href="{_attr(target)}">{to_str(tag)}</a>'


def within(value: Value, collection: Value = None) -> Value:
    return value


def stylesheet_tag(value: Value, *args: Value, **kwargs: Value) -> str:
    return f'<link rel="stylesheet" href="{_attr(value)}" type="text/css">'


def script_tag(value: Value, *args: Value, **kwargs: Value) -> str:
    return f'<script src="{_attr(value)}"></script>'


def preload_tag(value: Value, *args: Value, **kwargs: Value) -> str:
    kind = kwargs.get("as") or "script"
    return f'<link rel="preload" href="{_attr(value)}" as="{_attr(kind)}">'


FILTERS: Dict[str, FilterFunc] = {
    "shopify_asset_url": shopify_asset_url,
    "url": url,
    "link_to": link_to,
    "link_to_tag": link_to_tag,
    "within": within,
    "stylesheet_tag": stylesheet_tag,
    "script_tag": script_tag,
    "preload_tag": preload_tag,
}


__all__ = ["FILTERS", "create_url_filters", "SHOPIFY_ASSET_CDN"]
