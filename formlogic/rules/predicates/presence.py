"""Presence rules.

These are the only rules evaluated when the value is empty; every other
rule treats an empty value as nothing to check.
"""

from typing import Any

from formlogic.coercion import is_nullish, is_truthy, to_text
from formlogic.rules.models import FieldKind, Subject
from formlogic.rules.registry import rule


def _has_content(value: Any) -> bool:
    return is_truthy(value) and len(to_text(value)) > 0


@rule("required", category="presence", checks_empty=True)
def required(value: Any, _param: str | None, subject: Subject) -> bool:
    if subject.kind is FieldKind.CHECKBOX:
        return subject.checked
    if subject.kind is FieldKind.RADIO:
        return is_truthy(value)
    if is_nullish(value):
        return False
    return len(to_text(value).strip()) > 0


@rule("required_with", category="presence", checks_empty=True)
def required_with(value: Any, param: str | None, subject: Subject) -> bool:
    """Required when the named field has a value."""
    if _has_content(subject.other_value(param)):
        return required(value, None, subject)
    return True


@rule("required_without", category="presence", checks_empty=True)
def required_without(value: Any, param: str | None, subject: Subject) -> bool:
    """Required when the named field is empty."""
    if not _has_content(subject.other_value(param)):
        return required(value, None, subject)
    return True
