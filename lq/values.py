"""
Модель значений шаблона.

Все данные, с которыми работает интерпретатор (настройки секций, переменные
области видимости, результаты фильтров), принадлежат замкнутому типу Value:
nil | bool | число | строка | список | словарь.

Разрешающая (permissive) семантика на несовпадении типов выражена здесь явно:
каждая функция приведения описывает, что происходит с «чужим» значением,
вместо того чтобы полагаться на утиную типизацию.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Union

# Замкнутый тип значения шаблона. Элементы списков и словарей сами являются Value.
Number = Union[int, float, Decimal]
Value = Union[None, bool, int, float, Decimal, str, List[Any], Dict[str, Any]]


def is_number(value: Value) -> bool:
    """Истинно для int/float/Decimal, но не для bool."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def to_str(value: Value) -> str:
    """
    Строковое представление значения для вывода в HTML.

    Правила:
    - nil → пустая строка
    - true/false → "true"/"false"
    - список → конкатенация строковых представлений элементов
    - словарь → JSON
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "".join(to_str(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def to_number(value: Value, default: Number = 0) -> Number:
    """
    Приводит значение к числу.

    Строки разбираются как int, затем как float; всё, что не разбирается,
    даёт default. bool не считается числом.
    """
    if is_number(value):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return default
    return default


def to_int(value: Value, default: int = 0) -> int:
    """Приводит значение к целому, отбрасывая дробную часть."""
    number = to_number(value, default)
    try:
        return int(number)
    except (ValueError, OverflowError, InvalidOperation):
        return default


def to_decimal(value: Value) -> Decimal:
    """Точное десятичное представление числа (для денежных расчётов)."""
    number = to_number(value)
    if isinstance(number, float):
        return Decimal(repr(number))
    return Decimal(number)


def to_list(value: Value) -> List[Any]:
    """
    Приводит значение к списку для итерации.

    - nil → []
    - список → он же
    - словарь → список пар [ключ, значение]
    - строка → [строка] (пустая строка → [])
    - прочее → [значение]
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    if isinstance(value, dict):
        return [[k, v] for k, v in value.items()]
    if isinstance(value, str):
        return [value] if value else []
    return [value]


def is_truthy(value: Value) -> bool:
    """Истинность в смысле шаблона: ложны только nil и false."""
    return value is not None and value is not False


def is_empty(value: Value) -> bool:
    """Сравнение с литералом empty: пустые строка, список или словарь."""
    return isinstance(value, (str, list, tuple, dict)) and len(value) == 0


def is_blank(value: Value) -> bool:
    """Сравнение с литералом blank: nil, false, пробельная строка или пустая коллекция."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return is_empty(value)


def lookup(container: Value, key: Value) -> Value:
    """
    Доступ к свойству или элементу значения.

    Отсутствующий сегмент пути всегда даёт nil, исключение не выбрасывается.
    Для списков и строк поддерживаются псевдосвойства size/first/last,
    для словарей size, если такого ключа нет.
    """
    if container is None:
        return None

    if isinstance(container, dict):
        if isinstance(key, str) and key in container:
            return container[key]
        if key == "size":
            return len(container)
        if not isinstance(key, str) and key is not None:
            return container.get(to_str(key))
        return None

    if isinstance(container, (list, tuple)):
        if is_number(key):
            index = int(key)  # type: ignore[arg-type]
            if -len(container) <= index < len(container):
                return container[index]
            return None
        if key == "size":
            return len(container)
        if key == "first":
            return container[0] if container else None
        if key == "last":
            return container[-1] if container else None
        return None

    if isinstance(container, str):
        if key == "size":
            return len(container)
        if key == "first":
            return container[0] if container else None
        if key == "last":
            return container[-1] if container else None
        return None

    return None


def values_equal(left: Value, right: Value) -> bool:
    """
    Равенство значений шаблона.

    Числа сравниваются по величине (1 == 1.0), но bool никогда не равен числу.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return to_decimal(left) == to_decimal(right)
    return left == right


def normalize(value: Any) -> Value:
    """
    Приводит внешние данные (например, загруженный JSON) к Value.

    Кортежи становятся списками, ключи словарей становятся строками.
    """
    if isinstance(value, dict):
        return {str(k): normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize(v) for v in value]
    if value is None or isinstance(value, (bool, int, float, Decimal, str)):
        return value
    return str(value)


def as_dict(value: Value) -> Dict[str, Any]:
    """Возвращает словарь или пустой словарь для любого другого значения."""
    return value if isinstance(value, dict) else {}


__all__ = [
    "Number",
    "Value",
    "is_number",
    "to_str",
    "to_number",
    "to_int",
    "to_decimal",
    "to_list",
    "is_truthy",
    "is_empty",
    "is_blank",
    "lookup",
    "values_equal",
    "normalize",
    "as_dict",
]
