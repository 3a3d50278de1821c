"""
AST-узлы тегов темы: секции, сниппеты, формы, пагинация,
теги с сырым телом и теги, пишущие в нижний фрейм прохода.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple

from ..nodes import TemplateNode
from ...expressions import Expression

# Именованный аргумент тега: (имя, выражение)
NamedArgument = Tuple[str, Expression]


@dataclass(frozen=True)
class SectionTagNode(TemplateNode):
    """{% section 'name' %}: статическая секция со значениями схемы по умолчанию."""
    tag_name: ClassVar[str] = "section"

    name: str


@dataclass(frozen=True)
class SectionsTagNode(TemplateNode):
    """{% sections 'group' %}: группа секций из sections/GROUP.json."""
    tag_name: ClassVar[str] = "sections"

    group: str


@dataclass(frozen=True)
class RenderNode(TemplateNode):
    """
    {% render 'name', key: value %}, {% render 'name' with expr as alias %},
    {% render 'name' for expr as alias %}.

    Сниппет рендерится в изолированной области: видны только явно
    переданные переменные.

    Attributes:
        snippet: Выражение имени сниппета
        arguments: Именованные аргументы
        with_expr: Значение для with
        for_expr: Коллекция для for
        alias: Имя переменной для with/for (по умолчанию имя сниппета)
    """
    tag_name: ClassVar[str] = "render"

    snippet: Expression
    arguments: List[NamedArgument] = field(default_factory=list)
    with_expr: Optional[Expression] = None
    for_expr: Optional[Expression] = None
    alias: Optional[str] = None


@dataclass(frozen=True)
class IncludeNode(RenderNode):
    """{% include 'name' %}: сниппет видит всю область вызывающего шаблона."""
    tag_name: ClassVar[str] = "include"


@dataclass(frozen=True)
class FormNode(TemplateNode):
    """{% form 'type', object, class: '...' %}...{% endform %}"""
    tag_name: ClassVar[str] = "form"

    form_type: Expression
    body: List[TemplateNode]
    arguments: List[NamedArgument] = field(default_factory=list)


@dataclass(frozen=True)
class PaginateNode(TemplateNode):
    """
    {% paginate collection.products by 12 %}...{% endpaginate %}

    Всегда показывает первую страницу.
    """
    tag_name: ClassVar[str] = "paginate"

    collection: Expression
    body: List[TemplateNode]
    page_size: Optional[Expression] = None


@dataclass(frozen=True)
class SchemaNode(TemplateNode):
    """{% schema %}: JSON схемы секции, в вывод не попадает."""
    tag_name: ClassVar[str] = "schema"

    text: str


@dataclass(frozen=True)
class StylesheetNode(TemplateNode):
    tag_name: ClassVar[str] = "stylesheet"

    text: str


@dataclass(frozen=True)
class JavascriptNode(TemplateNode):
    tag_name: ClassVar[str] = "javascript"

    text: str


@dataclass(frozen=True)
class StyleNode(TemplateNode):
    """{% style %}: тело с разметкой Liquid внутри <style>."""
    tag_name: ClassVar[str] = "style"

    body: List[TemplateNode]


@dataclass(frozen=True)
class LayoutNode(TemplateNode):
    """{% layout 'name' %} или {% layout none %}; выбор макета делает сборщик страницы."""
    tag_name: ClassVar[str] = "layout"

    name: Optional[str]


@dataclass(frozen=True)
class ContentForNode(TemplateNode):
    """{% content_for 'header' %}: значение переменной content_for_NAME."""
    tag_name: ClassVar[str] = "content_for"

    name: str
    arguments: List[NamedArgument] = field(default_factory=list)


@dataclass(frozen=True)
class CaptureNode(TemplateNode):
    """{% capture name %}...{% endcapture %}: результат пишется в нижний фрейм."""
    tag_name: ClassVar[str] = "capture"

    name: str
    body: List[TemplateNode]


@dataclass(frozen=True)
class IncrementNode(TemplateNode):
    tag_name: ClassVar[str] = "increment"

    name: str


@dataclass(frozen=True)
class DecrementNode(TemplateNode):
    tag_name: ClassVar[str] = "decrement"

    name: str


@dataclass(frozen=True)
class CycleNode(TemplateNode):
    """
    {% cycle 'a', 'b' %} или {% cycle 'group': 'a', 'b' %}.

    Attributes:
        values: Значения цикла
        group: Выражение имени группы или None
        key: Ключ счётчика безымянной группы (исходный список значений)
    """
    tag_name: ClassVar[str] = "cycle"

    values: List[Expression]
    group: Optional[Expression] = None
    key: str = ""


@dataclass(frozen=True)
class TablerowNode(TemplateNode):
    """{% tablerow item in coll cols:N limit:N offset:N %}...{% endtablerow %}"""
    tag_name: ClassVar[str] = "tablerow"

    variable: str
    collection: Expression
    body: List[TemplateNode]
    cols: Optional[Expression] = None
    limit: Optional[Expression] = None
    offset: Optional[Expression] = None


__all__ = [
    "NamedArgument",
    "SectionTagNode",
    "SectionsTagNode",
    "RenderNode",
    "IncludeNode",
    "FormNode",
    "PaginateNode",
    "SchemaNode",
    "StylesheetNode",
    "JavascriptNode",
    "StyleNode",
    "LayoutNode",
    "ContentForNode",
    "CaptureNode",
    "IncrementNode",
    "DecrementNode",
    "CycleNode",
    "TablerowNode",
]
