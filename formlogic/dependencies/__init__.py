"""Conditional field dependencies (show/hide, enable/disable, require...)."""

from formlogic.dependencies.models import Dependency, PlannedAction
from formlogic.dependencies.planner import (
    INVERSE_ACTIONS,
    DependencyPlanner,
    group_by_source,
    inverse_of,
    parse_action,
)

__all__ = [
    "INVERSE_ACTIONS",
    "Dependency",
    "DependencyPlanner",
    "PlannedAction",
    "group_by_source",
    "inverse_of",
    "parse_action",
]
