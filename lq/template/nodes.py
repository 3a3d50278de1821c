"""
Корень иерархии узлов AST.

Узлы неизменяемы, поэтому разобранный шаблон безопасно кэшируется
и переиспользуется разными проходами. Конкретные узлы тегов живут
в плагинах; tag_name попадает в диагностику при ошибке узла.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, List


@dataclass(frozen=True)
class TemplateNode:
    tag_name: ClassVar[str] = "node"


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Статический текст между тегами, выводится как есть."""
    tag_name: ClassVar[str] = "text"

    text: str


TemplateAST = List[TemplateNode]


__all__ = ["TemplateNode", "TextNode", "TemplateAST"]
