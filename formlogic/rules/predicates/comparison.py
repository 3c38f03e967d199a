"""Comparison, size and character-composition rules.

Numeric rules coerce both sides with ``to_number``; a non-numeric side is
NaN and fails every ordered comparison.
"""

import operator
import re
from collections.abc import Callable
from typing import Any

from formlogic.coercion import to_number, to_text
from formlogic.rules.models import FieldKind, Subject
from formlogic.rules.registry import builtin_rules, rule

_ORDERED: dict[str, Callable[[float, float], bool]] = {
    "lt": operator.lt,
    "gt": operator.gt,
    "lte": operator.le,
    "gte": operator.ge,
}

_FIELD_ORDERED: dict[str, Callable[[float, float], bool]] = {
    "ltfield": operator.lt,
    "gtfield": operator.gt,
    "ltefield": operator.le,
    "gtefield": operator.ge,
}


@rule("eq", category="comparison")
def eq(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value) == to_text(param)


@rule("ne", category="comparison")
def ne(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value) != to_text(param)


@rule("eqfield", category="comparison")
def eqfield(value: Any, param: str | None, subject: Subject) -> bool:
    return to_text(value) == to_text(subject.other_value(param))


@rule("nefield", category="comparison")
def nefield(value: Any, param: str | None, subject: Subject) -> bool:
    return to_text(value) != to_text(subject.other_value(param))


def _ordered_rule(compare: Callable[[float, float], bool]) -> Callable[..., bool]:
    def predicate(value: Any, param: str | None, _subject: Subject) -> bool:
        return compare(to_number(value), to_number(param))

    return predicate


def _ordered_field_rule(compare: Callable[[float, float], bool]) -> Callable[..., bool]:
    def predicate(value: Any, param: str | None, subject: Subject) -> bool:
        return compare(to_number(value), to_number(subject.other_value(param)))

    return predicate


for _name, _compare in _ORDERED.items():
    builtin_rules.add(_name, _ordered_rule(_compare), category="comparison")

for _name, _compare in _FIELD_ORDERED.items():
    builtin_rules.add(_name, _ordered_field_rule(_compare), category="comparison")


# --- Size ---


@rule("len", category="size")
def exact_length(value: Any, param: str | None, _subject: Subject) -> bool:
    return len(to_text(value)) == to_number(param)


@rule("min", category="size")
def minimum(value: Any, param: str | None, subject: Subject) -> bool:
    """Numeric minimum for number fields, length minimum otherwise."""
    if subject.kind is FieldKind.NUMBER:
        return to_number(value) >= to_number(param)
    return len(to_text(value)) >= to_number(param)


@rule("max", category="size")
def maximum(value: Any, param: str | None, subject: Subject) -> bool:
    """Numeric maximum for number fields, length maximum otherwise."""
    if subject.kind is FieldKind.NUMBER:
        return to_number(value) <= to_number(param)
    return len(to_text(value)) <= to_number(param)


# --- Character composition ---

CHARACTER_CLASSES: dict[str, re.Pattern[str]] = {
    "min_alpha": re.compile(r"[a-zA-Z]"),
    "min_upper": re.compile(r"[A-Z]"),
    "min_digit": re.compile(r"[0-9]"),
    "min_symbol": re.compile(r"[^a-zA-Z0-9\s]"),
}


def _count_rule(pattern: re.Pattern[str]) -> Callable[..., bool]:
    def predicate(value: Any, param: str | None, _subject: Subject) -> bool:
        return len(pattern.findall(to_text(value))) >= to_number(param)

    return predicate


for _name, _pattern in CHARACTER_CLASSES.items():
    builtin_rules.add(_name, _count_rule(_pattern), category="composition")
