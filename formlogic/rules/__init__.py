"""Declarative field validation.

Usage:
    from formlogic.rules import Subject, validate

    result = validate("hi", "required,min:3", Subject(kind="text"))
    result.valid, result.failed, result.param  # False, "min", "3"
"""

from formlogic.rules.models import FieldKind, RuleChainResult, RuleToken, Subject
from formlogic.rules.registry import Predicate, RuleDefinition, RuleRegistry
from formlogic.rules.chain import ensure_required, parse_rule_chain
from formlogic.rules.engine import RuleEngine, is_empty, validate
from formlogic.rules.predicates import DEFAULT_REGISTRY

__all__ = [
    "DEFAULT_REGISTRY",
    "FieldKind",
    "Predicate",
    "RuleChainResult",
    "RuleDefinition",
    "RuleEngine",
    "RuleRegistry",
    "RuleToken",
    "Subject",
    "ensure_required",
    "is_empty",
    "parse_rule_chain",
    "validate",
]
