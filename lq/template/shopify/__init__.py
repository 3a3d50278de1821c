"""
Плагин тегов темы Shopify.

Обрабатывает:
- {% section 'name' %}, {% sections 'group' %}
- {% render 'name', key: value %}, {% include 'name' %}
- {% form %}, {% paginate %}, {% tablerow %}, {% style %}
- {% schema %}, {% stylesheet %}, {% javascript %}
- {% layout %}, {% content_for %}
- {% capture %}, {% increment %}, {% decrement %}, {% cycle %}
"""

from __future__ import annotations

from .nodes import (
    CaptureNode,
    ContentForNode,
    CycleNode,
    DecrementNode,
    FormNode,
    IncludeNode,
    IncrementNode,
    JavascriptNode,
    LayoutNode,
    PaginateNode,
    RenderNode,
    SchemaNode,
    SectionTagNode,
    SectionsTagNode,
    StyleNode,
    StylesheetNode,
    TablerowNode,
)
from .plugin import ShopifyTagsPlugin

__all__ = [
    "ShopifyTagsPlugin",
    "CaptureNode",
    "ContentForNode",
    "CycleNode",
    "DecrementNode",
    "FormNode",
    "IncludeNode",
    "IncrementNode",
    "JavascriptNode",
    "LayoutNode",
    "PaginateNode",
    "RenderNode",
    "SchemaNode",
    "SectionTagNode",
    "SectionsTagNode",
    "StyleNode",
    "StylesheetNode",
    "TablerowNode",
]
