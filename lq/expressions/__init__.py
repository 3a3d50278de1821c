"""
Язык выражений шаблона: литералы, пути, диапазоны, фильтры и условия.
"""

from __future__ import annotations

from .evaluator import ExpressionEvaluator, EvaluationError
from .lexer import ExpressionError
from .model import Expression, FilteredExpression, Literal, VariablePath
from .parser import ExpressionParser, parse_condition, parse_output

__all__ = [
    "Expression",
    "FilteredExpression",
    "Literal",
    "VariablePath",
    "ExpressionParser",
    "ExpressionError",
    "ExpressionEvaluator",
    "EvaluationError",
    "parse_output",
    "parse_condition",
]
