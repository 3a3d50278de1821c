"""
Модели данных для выражений шаблона.

Содержит неизменяемые узлы AST выражений: литералы, пути к переменным,
диапазоны, сравнения, логические связки и цепочки фильтров.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class ExpressionType(Enum):
    """Типы выражений."""
    LITERAL = "literal"
    SPECIAL = "special"        # empty / blank
    VARIABLE = "variable"
    RANGE = "range"
    COMPARISON = "comparison"
    LOGICAL = "logical"
    FILTERED = "filtered"


@dataclass(frozen=True)
class Expression(ABC):
    """Базовый абстрактный класс для всех выражений."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        """Возвращает тип выражения."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        """Внутренний метод для создания строкового представления."""
        pass


@dataclass(frozen=True)
class Literal(Expression):
    """Литерал: строка, число, true/false или nil."""
    value: Any

    def get_type(self) -> ExpressionType:
        return ExpressionType.LITERAL

    def _to_string(self) -> str:
        if isinstance(self.value, str):
            return repr(self.value)
        if self.value is None:
            return "nil"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


@dataclass(frozen=True)
class SpecialLiteral(Expression):
    """
    Литералы empty и blank.

    Имеют смысл только в сравнениях: x == empty, x != blank.
    """
    kind: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.SPECIAL

    def _to_string(self) -> str:
        return self.kind


# Сегмент пути: имя свойства или вычисляемый индекс [expr]
PathSegment = Union[str, Expression]


@dataclass(frozen=True)
class VariablePath(Expression):
    """
    Путь к переменной: name.prop[expr].other

    Пустое имя означает путь, начинающийся с индекса: ['key'].prop
    """
    name: str
    segments: Tuple[PathSegment, ...] = ()

    def get_type(self) -> ExpressionType:
        return ExpressionType.VARIABLE

    def _to_string(self) -> str:
        parts = [self.name]
        for segment in self.segments:
            if isinstance(segment, str):
                parts.append(f".{segment}")
            else:
                parts.append(f"[{segment}]")
        return "".join(parts)


@dataclass(frozen=True)
class RangeExpression(Expression):
    """Диапазон: (start..end), границы включительно."""
    start: Expression
    end: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.RANGE

    def _to_string(self) -> str:
        return f"({self.start}..{self.end})"


@dataclass(frozen=True)
class Comparison(Expression):
    """Сравнение: left OP right, где OP из == != <> < > <= >= contains."""
    operator: str
    left: Expression
    right: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class Logical(Expression):
    """
    Логическая связка: left and right / left or right.

    Связки правоассоциативны и не имеют приоритета друг над другом.
    """
    operator: str
    left: Expression
    right: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.LOGICAL

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class FilterCall:
    """Вызов фильтра: | name: arg1, arg2, key: value"""
    name: str
    args: Tuple[Expression, ...] = ()
    kwargs: Tuple[Tuple[str, Expression], ...] = ()

    def __str__(self) -> str:
        rendered = [str(a) for a in self.args] + [f"{k}: {v}" for k, v in self.kwargs]
        if not rendered:
            return self.name
        return f"{self.name}: {', '.join(rendered)}"


@dataclass(frozen=True)
class FilteredExpression(Expression):
    """Выражение с цепочкой фильтров, применяемых слева направо."""
    base: Expression
    filters: Tuple[FilterCall, ...] = ()

    def get_type(self) -> ExpressionType:
        return ExpressionType.FILTERED

    def _to_string(self) -> str:
        return " | ".join([str(self.base)] + [str(f) for f in self.filters])


__all__ = [
    "ExpressionType",
    "Expression",
    "Literal",
    "SpecialLiteral",
    "PathSegment",
    "VariablePath",
    "RangeExpression",
    "Comparison",
    "Logical",
    "FilterCall",
    "FilteredExpression",
]
