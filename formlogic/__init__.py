"""formlogic: condition expressions and declarative validation for form fields.

    from formlogic import evaluate, validate, Subject

    evaluate("value === 'admin' || fields.role == 'owner'", "admin", state_of, value_of)
    validate("4242424242424242", "required,credit_card", Subject())
"""

from formlogic.dependencies import Dependency, DependencyPlanner, PlannedAction
from formlogic.exceptions import ExpressionSyntaxError, FormLogicError, RuleRegistrationError
from formlogic.expressions import EvaluationContext, ExpressionEvaluator, evaluate, resolve
from formlogic.rules import (
    DEFAULT_REGISTRY,
    FieldKind,
    RuleChainResult,
    RuleEngine,
    RuleRegistry,
    Subject,
    validate,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "Dependency",
    "DependencyPlanner",
    "EvaluationContext",
    "ExpressionEvaluator",
    "ExpressionSyntaxError",
    "FieldKind",
    "FormLogicError",
    "PlannedAction",
    "RuleChainResult",
    "RuleEngine",
    "RuleRegistrationError",
    "RuleRegistry",
    "Subject",
    "evaluate",
    "resolve",
    "validate",
]
