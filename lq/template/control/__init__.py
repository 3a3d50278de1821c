"""
Плагин управляющих тегов.

Обрабатывает:
- {% if %}...{% elsif %}...{% else %}...{% endif %}, {% unless %}
- {% case %}...{% when %}...{% else %}...{% endcase %}
- {% for %}...{% else %}...{% endfor %}, {% break %}, {% continue %}
- {% assign %}, {% echo %}, {% liquid %}
- {% raw %}, {% comment %}
"""

from __future__ import annotations

from .nodes import (
    AssignNode,
    BreakNode,
    CaseNode,
    CommentNode,
    ConditionalBranch,
    ContinueNode,
    ForNode,
    IfNode,
    LiquidNode,
    RawNode,
    UnlessNode,
    WhenClause,
)
from .plugin import ControlFlowPlugin

__all__ = [
    "ControlFlowPlugin",
    "AssignNode",
    "BreakNode",
    "CaseNode",
    "CommentNode",
    "ConditionalBranch",
    "ContinueNode",
    "ForNode",
    "IfNode",
    "LiquidNode",
    "RawNode",
    "UnlessNode",
    "WhenClause",
]
