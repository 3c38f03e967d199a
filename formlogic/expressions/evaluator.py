"""Condition expression evaluation.

Evaluates the small boolean language used by field dependencies, e.g.
``value === 'admin' || fields.country == 'US' && checked``. Grammar:

    expr    := and ( "||" and )*
    and     := atom ( "&&" atom )*
    atom    := "(" expr ")" | operand OP operand
             | operand "." method "(" operand ")" | operand
    OP      := === !== == != >= <= > <
    method  := includes | startsWith | endsWith

Operands are literals, context keys, ``fields.<name>`` (delegated to the
caller's resolver), ``source.<key>`` or dotted paths rooted at a context
key. Unresolved identifiers evaluate to their own text. Nothing is ever
executed and no attribute of a host object is read.
"""

import math
from collections.abc import Mapping
from typing import Any

from formlogic.coercion import (
    UNDEFINED,
    is_nullish,
    is_truthy,
    loose_equals,
    parse_number_literal,
    strict_equals,
    to_number,
    to_text,
)
from formlogic.exceptions import FormLogicError
from formlogic.expressions.context import (
    CONTEXT_KEYS,
    EvaluationContext,
    FieldResolver,
    StateProvider,
)
from formlogic.expressions.parser import (
    require_operand,
    split_comparison,
    split_method_call,
    split_top_level,
    strip_enclosing_parens,
)
from formlogic.observability.logging import get_logger

logger = get_logger(__name__)

KEYWORDS: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": UNDEFINED,
}

# Path segments that would reach object internals in a host runtime
FORBIDDEN_SEGMENTS: frozenset[str] = frozenset({"__proto__", "constructor", "prototype"})

_COMPARATORS = {
    "===": strict_equals,
    "!==": lambda left, right: not strict_equals(left, right),
    "==": loose_equals,
    "!=": lambda left, right: not loose_equals(left, right),
    ">=": lambda left, right: to_number(left) >= to_number(right),
    "<=": lambda left, right: to_number(left) <= to_number(right),
    ">": lambda left, right: to_number(left) > to_number(right),
    "<": lambda left, right: to_number(left) < to_number(right),
}


def _member(container: Any, key: str) -> Any:
    """Read one path segment from plain data."""
    if isinstance(container, Mapping):
        return container.get(key, UNDEFINED)
    if isinstance(container, (str, list, tuple)):
        if key == "length":
            return len(container)
        if key.isascii() and key.isdigit():
            index = int(key)
            return container[index] if index < len(container) else UNDEFINED
    return UNDEFINED


def _walk(root: Any, segments: list[str]) -> Any:
    current = root
    for segment in segments:
        if segment in FORBIDDEN_SEGMENTS:
            return None
        if is_nullish(current):
            return None
        current = _member(current, segment)
    return current


def resolve(
    operand: str,
    context: EvaluationContext,
    field_resolver: FieldResolver | None = None,
) -> Any:
    """Resolve an operand to a value.

    Resolution order: quoted literal, finite number, keyword, context key,
    ``fields.`` reference, ``source.`` alias, dotted context path, and
    finally the operand text itself.
    """
    text = operand.strip()

    if text[:1] in ("'", '"') and text.endswith(text[0]):
        return text[1:-1]

    number = parse_number_literal(text)
    if number is not None:
        return number

    if text in KEYWORDS:
        return KEYWORDS[text]

    if text in CONTEXT_KEYS:
        return context.lookup(text)

    if text.startswith("fields."):
        return field_resolver(text[len("fields."):]) if field_resolver is not None else None

    if text.startswith("source."):
        return context.lookup(text[len("source."):])

    if "." in text:
        root, *segments = text.split(".")
        if root in CONTEXT_KEYS:
            return _walk(context.lookup(root), segments)

    return text


def _same_value_zero(left: Any, right: Any) -> bool:
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True
    return strict_equals(left, right)


def _call_method(target: Any, method: str, argument: Any) -> bool:
    if isinstance(target, str):
        needle = to_text(argument)
        if method == "includes":
            return needle in target
        if method == "startsWith":
            return target.startswith(needle)
        return target.endswith(needle)

    if isinstance(target, (list, tuple)) and method == "includes":
        return any(_same_value_zero(item, argument) for item in target)

    return False


class ExpressionEvaluator:
    """Evaluate condition expressions against a field's state.

    Evaluation fails closed: empty input, malformed expressions and any
    error raised while resolving operands produce ``False``.
    """

    def __init__(self, log_failures: bool = True) -> None:
        """Initialize the evaluator.

        Args:
            log_failures: Log rejected and failing expressions
        """
        self._log_failures = log_failures

    @classmethod
    def from_settings(cls) -> "ExpressionEvaluator":
        """Create an evaluator configured from the loaded settings."""
        from formlogic.config import get_settings

        return cls(log_failures=get_settings().expressions.log_failures)

    def evaluate(
        self,
        expression: Any,
        current_value: Any,
        state_provider: StateProvider | None = None,
        field_resolver: FieldResolver | None = None,
    ) -> bool:
        """Evaluate an expression for the subject field.

        Args:
            expression: Expression text
            current_value: Current value of the subject field (``value``)
            state_provider: Returns the disabled/readonly/required/visible/checked
                state of the subject field
            field_resolver: Returns the current value of another field by name

        Returns:
            Whether the condition holds
        """
        if not expression or not isinstance(expression, str):
            if self._log_failures:
                logger.warning(
                    "expression_rejected",
                    expression_type=type(expression).__name__,
                    reason="empty or not a string",
                )
            return False

        try:
            context = EvaluationContext.build(current_value, state_provider)
            return self._evaluate(expression.strip(), context, field_resolver)

        except FormLogicError as e:
            if self._log_failures:
                logger.warning(
                    "expression_syntax_error",
                    expression=expression,
                    error=str(e),
                )
            return False

        except Exception as e:  # noqa: BLE001
            if self._log_failures:
                logger.error(
                    "expression_evaluation_failed",
                    expression=expression,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            return False

    def _evaluate(
        self,
        expr: str,
        context: EvaluationContext,
        field_resolver: FieldResolver | None,
    ) -> bool:
        expr = strip_enclosing_parens(expr)

        # Operands are evaluated left to right and short-circuit
        terms = split_top_level(expr, "||")
        if len(terms) > 1:
            return any(self._evaluate(term, context, field_resolver) for term in terms)

        factors = split_top_level(expr, "&&")
        if len(factors) > 1:
            return all(self._evaluate(factor, context, field_resolver) for factor in factors)

        return self._evaluate_atom(expr, context, field_resolver)

    def _evaluate_atom(
        self,
        expr: str,
        context: EvaluationContext,
        field_resolver: FieldResolver | None,
    ) -> bool:
        atom = require_operand(expr, expr)

        comparison = split_comparison(atom)
        if comparison is not None:
            left, operator, right = comparison
            return _COMPARATORS[operator](
                resolve(left, context, field_resolver),
                resolve(right, context, field_resolver),
            )

        call = split_method_call(atom)
        if call is not None:
            target, method, argument = call
            return _call_method(
                resolve(target, context, field_resolver),
                method,
                resolve(argument, context, field_resolver),
            )

        return is_truthy(resolve(atom, context, field_resolver))


_default_evaluator = ExpressionEvaluator()


def evaluate(
    expression: Any,
    current_value: Any,
    state_provider: StateProvider | None = None,
    field_resolver: FieldResolver | None = None,
) -> bool:
    """Evaluate an expression with the default evaluator."""
    return _default_evaluator.evaluate(expression, current_value, state_provider, field_resolver)
