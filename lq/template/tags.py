"""
Общие помощники разбора тегов {% name markup %}.

Используются правилами парсинга всех плагинов: заглядывание в следующий тег,
чтение тела блочного тега до закрывающих тегов и захват «сырого» тела
с отслеживанием вложенности одноимённых тегов.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Collection, List, Optional, Tuple

from .nodes import TemplateNode, TextNode
from .tokens import Token, TokenType, ParserError
from .types import ParsingContext

# Имена токенов разделителей (регистрируются плагином разметки)
TAG_START = "TAG_START"
TAG_END = "TAG_END"
OUTPUT_START = "OUTPUT_START"
OUTPUT_END = "OUTPUT_END"
MARKUP = "MARKUP"

_TAG_NAME_RE = re.compile(r"\s*(#|[A-Za-z_]\w*)(.*)\Z", re.DOTALL)

# Тип функтора для рекурсивного парсинга
ParseNextNodeFunc = Callable[[ParsingContext], Optional[TemplateNode]]


@dataclass(frozen=True)
class TagHeader:
    """
    Разобранный заголовок тега.

    Attributes:
        name: Имя тега (первое слово)
        markup: Аргументы после имени, без крайних пробелов
        token: Открывающий токен (для позиции в ошибках)
        length: Число токенов от {% до %} включительно
    """
    name: str
    markup: str
    token: Token
    length: int


def peek_tag(context: ParsingContext, offset: int = 0) -> Optional[TagHeader]:
    """
    Читает заголовок тега в позиции курсора (+offset), не сдвигая курсор.

    Returns:
        TagHeader или None, если там нет завершённого тега
    """
    start = context.peek(offset)
    if start.type != TAG_START:
        return None

    parts: List[str] = []
    index = offset + 1
    while True:
        token = context.peek(index)
        if token.type == TAG_END:
            break
        if token.type == TokenType.EOF.value:
            return None
        parts.append(token.value)
        index += 1

    content = "".join(parts)
    match = _TAG_NAME_RE.match(content)
    if match:
        name, markup = match.group(1), match.group(2).strip()
    else:
        name, markup = "", content.strip()
    return TagHeader(name=name, markup=markup, token=start, length=index - offset + 1)


def read_tag(context: ParsingContext) -> TagHeader:
    """
    Потребляет тег в позиции курсора.

    Raises:
        ParserError: Если в позиции курсора нет завершённого тега
    """
    header = peek_tag(context)
    if header is None:
        raise ParserError("Expected a complete {% ... %} tag", context.current())
    for _ in range(header.length):
        context.advance()
    return header


def parse_body(
    context: ParsingContext,
    parse_next_node: ParseNextNodeFunc,
    stop_names: Collection[str],
) -> Tuple[List[TemplateNode], TagHeader]:
    """
    Парсит тело блочного тега до первого тега из stop_names.

    Вложенные конструкции разбираются рекурсивно через parse_next_node,
    поэтому вложенный одноимённый блок потребляет собственный end-тег.

    Returns:
        (узлы тела, заголовок потреблённого стоп-тега)

    Raises:
        ParserError: Если шаблон закончился раньше стоп-тега
    """
    body: List[TemplateNode] = []

    while not context.is_at_end():
        header = peek_tag(context)
        if header is not None and header.name in stop_names:
            read_tag(context)
            return body, header

        node = parse_next_node(context)
        if node is None:
            token = context.advance()
            node = TextNode(text=token.value)

        if isinstance(node, TextNode) and body and isinstance(body[-1], TextNode):
            body[-1] = TextNode(text=body[-1].text + node.text)
        else:
            body.append(node)

    expected = " or ".join(sorted(stop_names))
    raise ParserError(f"Unexpected end of template, expected {{% {expected} %}}", context.current())


def capture_raw(context: ParsingContext, tag_name: str) -> str:
    """
    Захватывает исходный текст тела до {% end<tag_name> %} без разбора.

    Вложенные теги с тем же именем увеличивают глубину, тело закрывается
    только парным end-тегом на глубине 0.

    Raises:
        ParserError: Если парный end-тег не найден
    """
    end_name = f"end{tag_name}"
    depth = 0
    parts: List[str] = []

    while not context.is_at_end():
        header = peek_tag(context)
        if header is not None:
            if header.name == tag_name:
                depth += 1
            elif header.name == end_name:
                if depth == 0:
                    read_tag(context)
                    return "".join(parts)
                depth -= 1
        parts.append(context.advance().value)

    raise ParserError(f"Unexpected end of template, expected {{% {end_name} %}}", context.current())


__all__ = [
    "TAG_START",
    "TAG_END",
    "OUTPUT_START",
    "OUTPUT_END",
    "MARKUP",
    "ParseNextNodeFunc",
    "TagHeader",
    "peek_tag",
    "read_tag",
    "parse_body",
    "capture_raw",
]
