"""Content rules: substrings, affixes, set membership and file extensions."""

import re
from collections.abc import Callable, Iterable
from typing import Any

from formlogic.coercion import is_truthy, to_text
from formlogic.config.models.rules import DEFAULT_IMAGE_EXTENSIONS
from formlogic.rules.models import Subject
from formlogic.rules.registry import rule

_LIST_SEPARATORS = re.compile(r"[, ]+")
BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})


@rule("contains", category="content")
def contains(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(param) in to_text(value)


@rule("notcontains", "excludes", category="content")
def notcontains(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(param) not in to_text(value)


@rule("containsany", category="content")
def containsany(value: Any, param: str | None, _subject: Subject) -> bool:
    """At least one character of the parameter occurs in the value."""
    text = to_text(value)
    return any(char in text for char in to_text(param))


@rule("excludesall", category="content")
def excludesall(value: Any, param: str | None, _subject: Subject) -> bool:
    """No character of the parameter occurs in the value."""
    text = to_text(value)
    return not any(char in text for char in to_text(param))


@rule("startswith", category="content")
def startswith(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value).startswith(to_text(param))


@rule("endswith", category="content")
def endswith(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value).endswith(to_text(param))


@rule("startsnotwith", category="content")
def startsnotwith(value: Any, param: str | None, _subject: Subject) -> bool:
    return not to_text(value).startswith(to_text(param))


@rule("endsnotwith", category="content")
def endsnotwith(value: Any, param: str | None, _subject: Subject) -> bool:
    return not to_text(value).endswith(to_text(param))


def _options(param: str | None) -> list[str]:
    return _LIST_SEPARATORS.split(param or "")


@rule("oneof", category="content")
def oneof(value: Any, param: str | None, _subject: Subject) -> bool:
    """Value is one of the comma- or space-separated options."""
    return to_text(value) in _options(param)


@rule("neof", category="content")
def neof(value: Any, param: str | None, _subject: Subject) -> bool:
    return to_text(value) not in _options(param)


@rule("boolean", category="content")
def boolean(value: Any, _param: str | None, _subject: Subject) -> bool:
    return to_text(value).lower() in BOOLEAN_STRINGS


def has_extension(value: Any, allowed: Iterable[str]) -> bool:
    """Check a file name's extension, case-insensitively."""
    if not is_truthy(value):
        return True
    extension = to_text(value).split(".")[-1].lower()
    return extension in {item.strip().lower() for item in allowed}


@rule("ext", category="content")
def ext(value: Any, param: str | None, _subject: Subject) -> bool:
    """File extension in a semicolon-separated allow-list."""
    return has_extension(value, (param or "").split(";"))


def extension_rule(extensions: Iterable[str]) -> Callable[[Any, str | None, Subject], bool]:
    """Build an extension check with a fixed allow-list."""
    allowed = tuple(extensions)

    def predicate(value: Any, _param: str | None, _subject: Subject) -> bool:
        return has_extension(value, allowed)

    return predicate


image = extension_rule(DEFAULT_IMAGE_EXTENSIONS)
rule("image", category="content")(image)
