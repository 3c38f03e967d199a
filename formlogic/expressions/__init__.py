"""Condition expressions for field dependencies.

Usage:
    from formlogic.expressions import evaluate

    evaluate("value === 'admin' || checked", "admin", state_of, value_of)
"""

from formlogic.expressions.context import (
    CONTEXT_KEYS,
    STATE_ATTRIBUTES,
    EvaluationContext,
    FieldResolver,
    StateProvider,
)
from formlogic.expressions.evaluator import ExpressionEvaluator, evaluate, resolve

__all__ = [
    "CONTEXT_KEYS",
    "STATE_ATTRIBUTES",
    "EvaluationContext",
    "ExpressionEvaluator",
    "FieldResolver",
    "StateProvider",
    "evaluate",
    "resolve",
]
