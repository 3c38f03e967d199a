"""Dependency planning.

Decides which actions a change to a source field triggers. Applying the
actions to widgets and presenting confirmations are left to the caller.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from formlogic.dependencies.models import Dependency, PlannedAction
from formlogic.expressions.context import FieldResolver, StateProvider
from formlogic.expressions.evaluator import ExpressionEvaluator
from formlogic.observability.logging import get_logger

logger = get_logger(__name__)

INVERSE_ACTIONS: dict[str, str] = {
    "enable": "disable",
    "disable": "enable",
    "show": "hide",
    "hide": "show",
    "required": "optional",
    "optional": "required",
    "readonly": "editable",
    "editable": "readonly",
}


def parse_action(action: str | None) -> tuple[str | None, str | None]:
    """Split ``name:param`` into its parts."""
    if not action:
        return None, None
    name, separator, param = action.partition(":")
    return name, param if separator else None


def inverse_of(action: str | None) -> str | None:
    """Natural inverse of an action, ignoring its parameter."""
    name, _ = parse_action(action)
    if name is None:
        return None
    return INVERSE_ACTIONS.get(name)


def group_by_source(dependencies: Iterable[Dependency]) -> dict[str, list[Dependency]]:
    """Index dependencies by each of their source field names."""
    grouped: dict[str, list[Dependency]] = {}
    for dependency in dependencies:
        for source in dependency.sources:
            grouped.setdefault(source, []).append(dependency)
    return grouped


class DependencyPlanner:
    """Plan target actions for one source field's dependencies."""

    def __init__(self, evaluator: ExpressionEvaluator | None = None) -> None:
        self._evaluator = evaluator if evaluator is not None else ExpressionEvaluator()

    def confirmation_for(
        self,
        dependencies: Sequence[Dependency],
        value: Any,
        state_provider: StateProvider | None = None,
        field_resolver: FieldResolver | None = None,
    ) -> str | None:
        """Confirmation text of the first met dependency that asks for one."""
        for dependency in dependencies:
            if dependency.confirm and self._evaluator.evaluate(
                dependency.condition, value, state_provider, field_resolver
            ):
                return dependency.confirm
        return None

    def plan(
        self,
        dependencies: Sequence[Dependency],
        value: Any,
        state_provider: StateProvider | None = None,
        field_resolver: FieldResolver | None = None,
        is_change: bool = True,
    ) -> list[PlannedAction]:
        """Plan actions for a source field's current value.

        Args:
            dependencies: Dependencies whose source is the changed field
            value: Current value of the source field
            state_provider: State of the source field
            field_resolver: Values of other fields
            is_change: False while the user is still typing; dependencies that
                need confirmation wait for the committed change

        Returns:
            One PlannedAction per target of every applicable dependency
        """
        if not is_change and self.confirmation_for(
            dependencies, value, state_provider, field_resolver
        ):
            logger.debug("dependency_plan_deferred", reason="confirmation pending")
            return []

        planned: list[PlannedAction] = []
        for dependency in dependencies:
            if not is_change and dependency.confirm:
                continue

            met = self._evaluator.evaluate(
                dependency.condition, value, state_provider, field_resolver
            )
            if met:
                action = dependency.action
            else:
                action = dependency.inverse_action or inverse_of(dependency.action)
            name, param = parse_action(action)
            delay = dependency.time if met and dependency.time else 0

            for target in dependency.targets:
                planned.append(
                    PlannedAction(
                        target=target,
                        action=name,
                        param=param,
                        delay_ms=delay,
                        met=met,
                        message=dependency.message,
                    )
                )

        return planned
