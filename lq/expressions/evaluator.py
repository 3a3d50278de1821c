"""
Вычислитель выражений шаблона.

Проходит по AST выражения и вычисляет его значение в текущей области
видимости. Разрешение путей «разрешающее»: отсутствующий сегмент даёт nil,
а не исключение. Фильтры применяются слева направо через реестр фильтров.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, cast

from .model import (
    Comparison,
    Expression,
    ExpressionType,
    FilteredExpression,
    Literal,
    Logical,
    RangeExpression,
    SpecialLiteral,
    VariablePath,
)
from ..scope import Scope
from ..values import (
    Value,
    is_blank,
    is_empty,
    is_number,
    is_truthy,
    lookup,
    to_decimal,
    to_int,
    to_str,
    values_equal,
)

if TYPE_CHECKING:
    from ..filters.registry import FilterRegistry


class EvaluationError(Exception):
    """Ошибка при вычислении выражения."""
    pass


class ExpressionEvaluator:
    """
    Вычислитель выражений.

    Принимает AST выражения и область видимости, возвращает значение Value.
    """

    def __init__(self, scope: Scope, filters: "FilterRegistry"):
        """
        Инициализирует вычислитель.

        Args:
            scope: Текущая область видимости
            filters: Реестр фильтров для цепочек | name
        """
        self.scope = scope
        self.filters = filters

    def evaluate(self, expression: Expression) -> Value:
        """
        Вычисляет значение выражения.

        Args:
            expression: Корневой узел AST выражения

        Returns:
            Значение выражения

        Raises:
            EvaluationError: При неизвестном типе выражения
        """
        expression_type = expression.get_type()

        if expression_type == ExpressionType.LITERAL:
            return cast(Literal, expression).value
        elif expression_type == ExpressionType.VARIABLE:
            return self._evaluate_path(cast(VariablePath, expression))
        elif expression_type == ExpressionType.FILTERED:
            return self._evaluate_filtered(cast(FilteredExpression, expression))
        elif expression_type == ExpressionType.RANGE:
            return self._evaluate_range(cast(RangeExpression, expression))
        elif expression_type == ExpressionType.COMPARISON:
            return self._evaluate_comparison(cast(Comparison, expression))
        elif expression_type == ExpressionType.LOGICAL:
            return self._evaluate_logical(cast(Logical, expression))
        elif expression_type == ExpressionType.SPECIAL:
            # Вне сравнения empty ведёт себя как пустая строка
            return ""
        else:
            raise EvaluationError(f"Unknown expression type: {expression_type}")

    def test(self, expression: Expression) -> bool:
        """Вычисляет выражение как условие."""
        return is_truthy(self.evaluate(expression))

    def _evaluate_path(self, path: VariablePath) -> Value:
        """
        Вычисляет путь name.a[b].c

        Каждый сегмент разрешается через lookup; nil на любом шаге
        даёт nil для всего пути.
        """
        if path.name:
            value = self.scope.resolve(path.name)
            segments = path.segments
        else:
            # Путь вида ['name'].x начинается с динамического имени переменной
            value = self.scope.resolve(to_str(self.evaluate(cast(Expression, path.segments[0]))))
            segments = path.segments[1:]

        for segment in segments:
            if value is None:
                return None
            key = segment if isinstance(segment, str) else self.evaluate(segment)
            value = lookup(value, key)

        return value

    def _evaluate_filtered(self, expression: FilteredExpression) -> Value:
        """Применяет фильтры по порядку к значению базового выражения."""
        value = self.evaluate(expression.base)
        for call in expression.filters:
            args = [self.evaluate(arg) for arg in call.args]
            kwargs: Dict[str, Any] = {name: self.evaluate(arg) for name, arg in call.kwargs}
            value = self.filters.apply(call.name, value, args, kwargs)
        return value

    def _evaluate_range(self, expression: RangeExpression) -> List[int]:
        """Диапазон с включёнными границами; пустой при start > end."""
        start = to_int(self.evaluate(expression.start))
        end = to_int(self.evaluate(expression.end))
        return list(range(start, end + 1))

    def _evaluate_logical(self, expression: Logical) -> bool:
        """
        Вычисляет and/or.

        Использует короткое вычисление (short-circuit evaluation).
        """
        left = self.test(expression.left)
        if expression.operator == 'and':
            if not left:
                return False  # Короткое вычисление
            return self.test(expression.right)

        if left:
            return True  # Короткое вычисление
        return self.test(expression.right)

    def _evaluate_comparison(self, expression: Comparison) -> bool:
        """Вычисляет сравнение, включая особые литералы empty/blank."""
        operator = expression.operator

        if isinstance(expression.left, SpecialLiteral) or isinstance(expression.right, SpecialLiteral):
            return self._compare_special(expression)

        left = self.evaluate(expression.left)
        right = self.evaluate(expression.right)

        if operator == '==':
            return values_equal(left, right)
        if operator == '!=':
            return not values_equal(left, right)
        if operator == 'contains':
            return _contains(left, right)
        return _order(operator, left, right)

    def _compare_special(self, expression: Comparison) -> bool:
        """Сравнение с empty/blank: проверяется пустота другого операнда."""
        if isinstance(expression.right, SpecialLiteral):
            special, other = expression.right, expression.left
        else:
            special, other = cast(SpecialLiteral, expression.left), expression.right

        if isinstance(other, SpecialLiteral):
            matched = other.kind == special.kind
        else:
            value = self.evaluate(other)
            matched = is_blank(value) if special.kind == 'blank' else is_empty(value)

        if expression.operator == '==':
            return matched
        if expression.operator == '!=':
            return not matched
        return False


def _contains(container: Value, item: Value) -> bool:
    """Оператор contains: подстрока, элемент списка или ключ словаря."""
    if isinstance(container, str):
        return to_str(item) in container
    if isinstance(container, list):
        return any(values_equal(element, item) for element in container)
    if isinstance(container, dict):
        return to_str(item) in container
    return False


def _order(operator: str, left: Value, right: Value) -> bool:
    """Операторы порядка; для несравнимых типов результат ложен."""
    if is_number(left) and is_number(right):
        a: Any = to_decimal(left)
        b: Any = to_decimal(right)
    elif isinstance(left, str) and isinstance(right, str):
        a, b = left, right
    else:
        return False

    if operator == '<':
        return a < b
    if operator == '>':
        return a > b
    if operator == '<=':
        return a <= b
    if operator == '>=':
        return a >= b
    raise EvaluationError(f"Unknown comparison operator: {operator}")


__all__ = ["EvaluationError", "ExpressionEvaluator"]
