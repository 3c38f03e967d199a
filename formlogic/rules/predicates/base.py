"""Helpers for pattern-based predicates."""

import re
from collections.abc import Callable, Mapping
from typing import Any

from formlogic.coercion import to_text
from formlogic.rules.models import Subject
from formlogic.rules.registry import builtin_rules


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a whole-value pattern; character classes stay ASCII-only."""
    return re.compile(pattern, re.ASCII)


def matches(pattern: re.Pattern[str], value: Any) -> bool:
    """Check that the whole textual value matches."""
    return pattern.fullmatch(to_text(value)) is not None


def pattern_predicate(pattern: re.Pattern[str]) -> Callable[[Any, str | None, Subject], bool]:
    def predicate(value: Any, _param: str | None, _subject: Subject) -> bool:
        return matches(pattern, value)

    return predicate


def register_patterns(patterns: Mapping[str, str], category: str) -> dict[str, re.Pattern[str]]:
    """Register one predicate per pattern and return the compiled patterns."""
    compiled = {name: compile_pattern(pattern) for name, pattern in patterns.items()}
    for name, pattern in compiled.items():
        builtin_rules.add(name, pattern_predicate(pattern), category=category)
    return compiled
