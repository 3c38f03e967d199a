"""Registry of named validation predicates.

A registry is immutable once built. Adding rules goes through ``extend`` or
``with_rule``, which return a new registry and leave the original untouched.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from formlogic.exceptions import RuleRegistrationError
from formlogic.rules.models import Subject

Predicate = Callable[[Any, str | None, Subject], bool]

_RESERVED_CHARS = frozenset(",=: \t\r\n")


@dataclass(frozen=True)
class RuleDefinition:
    """A registered predicate with its evaluation tags."""

    name: str
    predicate: Predicate
    checks_empty: bool = False
    category: str = "custom"


def _check_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise RuleRegistrationError("Rule name must be a non-empty string", rule_name=str(name))
    if _RESERVED_CHARS & set(name):
        raise RuleRegistrationError(
            f"Rule name '{name}' contains a separator or whitespace",
            rule_name=name,
        )
    return name


def _as_definition(name: str, rule: "Predicate | RuleDefinition") -> RuleDefinition:
    name = _check_name(name)
    if isinstance(rule, RuleDefinition):
        if rule.name != name:
            return RuleDefinition(name, rule.predicate, rule.checks_empty, rule.category)
        return rule
    if not callable(rule):
        raise RuleRegistrationError(f"Rule '{name}' is not callable", rule_name=name)
    return RuleDefinition(name=name, predicate=rule)


class RuleRegistry(Mapping[str, RuleDefinition]):
    """Read-only mapping of rule name to definition."""

    def __init__(self, rules: Mapping[str, "Predicate | RuleDefinition"] | None = None) -> None:
        definitions = {name: _as_definition(name, rule) for name, rule in (rules or {}).items()}
        self._rules: Mapping[str, RuleDefinition] = MappingProxyType(definitions)

    def __getitem__(self, name: str) -> RuleDefinition:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({len(self)} rules)"

    def extend(self, rules: Mapping[str, "Predicate | RuleDefinition"]) -> "RuleRegistry":
        """Return a new registry with additional or replaced rules."""
        merged: dict[str, Predicate | RuleDefinition] = dict(self._rules)
        merged.update(rules)
        return RuleRegistry(merged)

    def with_rule(
        self,
        name: str,
        predicate: Predicate,
        checks_empty: bool = False,
    ) -> "RuleRegistry":
        """Return a new registry with one more rule."""
        if not callable(predicate):
            raise RuleRegistrationError(f"Rule '{name}' is not callable", rule_name=name)
        return self.extend({name: RuleDefinition(name, predicate, checks_empty)})


class RuleCollector:
    """Collects built-in predicates via decorator before the registry is frozen."""

    def __init__(self) -> None:
        self._rules: dict[str, RuleDefinition] = {}

    def rule(
        self,
        *names: str,
        category: str,
        checks_empty: bool = False,
    ) -> Callable[[Predicate], Predicate]:
        """Register a predicate under one or more names."""

        def decorator(predicate: Predicate) -> Predicate:
            for name in names:
                self.add(name, predicate, category=category, checks_empty=checks_empty)
            return predicate

        return decorator

    def add(
        self,
        name: str,
        predicate: Predicate,
        category: str,
        checks_empty: bool = False,
    ) -> None:
        if name in self._rules:
            raise RuleRegistrationError(f"Rule '{name}' is already registered", rule_name=name)
        self._rules[_check_name(name)] = RuleDefinition(name, predicate, checks_empty, category)

    def build(self) -> RuleRegistry:
        return RuleRegistry(self._rules)


builtin_rules = RuleCollector()
rule = builtin_rules.rule
