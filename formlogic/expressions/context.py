"""Evaluation context for condition expressions."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from formlogic.coercion import UNDEFINED

StateProvider = Callable[[str], Any]
FieldResolver = Callable[[str], Any]

STATE_ATTRIBUTES: tuple[str, ...] = ("disabled", "readonly", "required", "visible", "checked")
CONTEXT_KEYS: frozenset[str] = frozenset({"value", *STATE_ATTRIBUTES})


class EvaluationContext(BaseModel):
    """Snapshot of the subject field exposed to one expression evaluation.

    Built fresh for every call and never mutated. Only the six fixed keys
    are reachable; ``lookup`` answers ``UNDEFINED`` for anything else.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any = None
    disabled: Any = UNDEFINED
    readonly: Any = UNDEFINED
    required: Any = UNDEFINED
    visible: Any = UNDEFINED
    checked: Any = UNDEFINED

    @classmethod
    def build(
        cls,
        current_value: Any,
        state_provider: StateProvider | None,
    ) -> "EvaluationContext":
        """Populate the context from the current value and a state provider."""
        states = {
            attr: state_provider(attr) if state_provider is not None else UNDEFINED
            for attr in STATE_ATTRIBUTES
        }
        return cls(value=current_value, **states)

    def lookup(self, key: str) -> Any:
        """Return the value of a context key, or UNDEFINED for unknown keys."""
        if key not in CONTEXT_KEYS:
            return UNDEFINED
        return getattr(self, key)
