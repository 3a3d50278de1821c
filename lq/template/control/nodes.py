"""
AST-узлы управляющих тегов.

Определяет неизменяемые классы узлов для условий, циклов,
присваиваний и блоков без разбора.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from ..nodes import TemplateNode
from ...expressions import Expression


@dataclass(frozen=True)
class ConditionalBranch:
    """
    Ветка условного тега: if или elsif.

    Attributes:
        condition: Разобранное условие
        body: Узлы, рендерящиеся при истинном условии
    """
    condition: Expression
    body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    Условный блок {% if %}...{% elsif %}...{% else %}...{% endif %}.

    Рендерится тело первой ветки с истинным условием,
    иначе тело else, если оно есть.
    """
    tag_name: ClassVar[str] = "if"

    branches: List[ConditionalBranch]
    else_body: Optional[List[TemplateNode]] = None


@dataclass(frozen=True)
class UnlessNode(IfNode):
    """{% unless %}: условие первой ветки инвертировано."""
    tag_name: ClassVar[str] = "unless"


@dataclass(frozen=True)
class WhenClause:
    """Ветка {% when a, b or c %} тега case."""
    values: List[Expression]
    body: List[TemplateNode] = field(default_factory=list)


@dataclass(frozen=True)
class CaseNode(TemplateNode):
    """{% case subject %}{% when ... %}...{% else %}...{% endcase %}"""
    tag_name: ClassVar[str] = "case"

    subject: Expression
    whens: List[WhenClause]
    else_body: Optional[List[TemplateNode]] = None


@dataclass(frozen=True)
class ForNode(TemplateNode):
    """
    Цикл {% for item in collection limit:N offset:N reversed %}.

    Attributes:
        variable: Имя переменной цикла
        collection: Выражение коллекции (путь или диапазон)
        body: Тело цикла
        else_body: Тело {% else %} для пустой коллекции
        limit: Максимальное число итераций
        offset: Число пропускаемых элементов
        reversed: Обратный порядок (после limit/offset)
    """
    tag_name: ClassVar[str] = "for"

    variable: str
    collection: Expression
    body: List[TemplateNode]
    else_body: Optional[List[TemplateNode]] = None
    limit: Optional[Expression] = None
    offset: Optional[Expression] = None
    reversed: bool = False


@dataclass(frozen=True)
class BreakNode(TemplateNode):
    tag_name: ClassVar[str] = "break"


@dataclass(frozen=True)
class ContinueNode(TemplateNode):
    tag_name: ClassVar[str] = "continue"


@dataclass(frozen=True)
class AssignNode(TemplateNode):
    """{% assign name = expr | filter %}"""
    tag_name: ClassVar[str] = "assign"

    name: str
    expression: Expression


@dataclass(frozen=True)
class RawNode(TemplateNode):
    """Тело {% raw %}, выводится без разбора."""
    tag_name: ClassVar[str] = "raw"

    text: str


@dataclass(frozen=True)
class CommentNode(TemplateNode):
    """{% comment %}...{% endcomment %} и {% # ... %}; в вывод не попадает."""
    tag_name: ClassVar[str] = "comment"

    text: str = ""


@dataclass(frozen=True)
class LiquidNode(TemplateNode):
    """
    Многострочный тег {% liquid %}.

    Каждая непустая строка разобрана как отдельный тег;
    тело рендерится одним проходом.
    """
    tag_name: ClassVar[str] = "liquid"

    body: List[TemplateNode]


__all__ = [
    "ConditionalBranch",
    "IfNode",
    "UnlessNode",
    "WhenClause",
    "CaseNode",
    "ForNode",
    "BreakNode",
    "ContinueNode",
    "AssignNode",
    "RawNode",
    "CommentNode",
    "LiquidNode",
]
