"""Format rules: character sets, colors, encodings, identifiers and finance."""

import json
import math
import re
import unicodedata
from typing import Any

from formlogic.coercion import to_number, to_text
from formlogic.rules.models import Subject
from formlogic.rules.predicates.base import register_patterns
from formlogic.rules.registry import rule

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_NON_ASCII = re.compile(r"[^\x00-\x7F]")

_RGB_COMPONENT = r"(?:\d{1,2}|1\d\d|2(?:[0-4]\d|5[0-5]))"
_DECIMAL = r"(?:\d+|\d*\.\d+)"
_ALPHA = r"(?:[0-9]*\.[0-9]+|[0-9]+)"
_SEMVER_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_HEX = "[0-9a-fA-F]"

PATTERNS = register_patterns(
    {
        # Character sets
        "alpha": r"[a-zA-Z]+",
        "alphanum": r"[a-zA-Z0-9]+",
        "numeric": r"\d+",
        "hexadecimal": r"[0-9a-fA-F]+",
        "ascii": r"[\x00-\x7F]+",
        "print": r"[\x20-\x7E]+",
        # Colors
        "hexcolor": r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})",
        "iscolor": r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})",
        "rgb": rf"rgb\(\s*(?:{_RGB_COMPONENT}\s*,?){{3}}\)",
        "rgba": rf"rgba\(\s*(?:{_RGB_COMPONENT}\s*,?){{3}}\s*{_ALPHA}\)",
        "hsl": rf"hsl\(\s*{_DECIMAL}\s*,\s*{_DECIMAL}%\s*,\s*{_DECIMAL}%\s*\)",
        "hsla": rf"hsla\(\s*{_DECIMAL}\s*,\s*{_DECIMAL}%\s*,\s*{_DECIMAL}%\s*,\s*{_ALPHA}\)",
        # Encodings
        "base64": r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?",
        "base64url": r"[A-Za-z0-9_-]+",
        "datauri": r"data:.+;base64,.+",
        "magnet": r"magnet:\?xt=urn:[a-z0-9]+:[a-z0-9]{32,40}&dn=.+&tr=.+",
        "jwt": r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+",
        # Identifiers
        "isbn": (
            r"(?:ISBN(?:-1[03])?:? )?"
            r"(?=[0-9X]{10}\Z|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}\Z|97[89][0-9]{10}\Z"
            r"|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}\Z)"
            r"(?:97[89][- ]?)?[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]"
        ),
        "isbn10": (
            r"(?:ISBN(?:-10)?:? )?"
            r"(?=[0-9X]{10}\Z|(?=(?:[0-9]+[- ]){3})[- 0-9X]{13}\Z)"
            r"[0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9X]"
        ),
        "isbn13": (
            r"(?:ISBN(?:-13)?:? )?"
            r"(?=[0-9]{13}\Z|(?=(?:[0-9]+[- ]){4})[- 0-9]{17}\Z)"
            r"97[89][0-9]{1,5}[- ]?[0-9]+[- ]?[0-9]+[- ]?[0-9]"
        ),
        "issn": r"\d{4}-\d{3}[\dX]",
        "uuid": rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}",
        "uuid3": rf"{_HEX}{{8}}-{_HEX}{{4}}-3{_HEX}{{3}}-{_HEX}{{4}}-{_HEX}{{12}}",
        "uuid4": rf"{_HEX}{{8}}-{_HEX}{{4}}-4{_HEX}{{3}}-[89abAB]{_HEX}{{3}}-{_HEX}{{12}}",
        "uuid5": rf"{_HEX}{{8}}-{_HEX}{{4}}-5{_HEX}{{3}}-[89abAB]{_HEX}{{3}}-{_HEX}{{12}}",
        "ssn": r"\d{3}-\d{2}-\d{4}",
        "semver": (
            r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
            rf"(?:-({_SEMVER_IDENT}(?:\.{_SEMVER_IDENT})*))?"
            r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"
        ),
        "country_code": r"[A-Z]{2}",
        # Geography
        "latitude": r"[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?)",
        "longitude": r"[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)",
        # Finance
        "bic": r"[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?",
        "btc_addr": r"(1|3)[a-zA-Z1-9]{26,33}",
        "btc_addr_bech32": r"bc1[a-z0-9]{39,59}",
        "eth_addr": r"0x[a-fA-F0-9]{40}",
    },
    category="format",
)


@rule("number", category="format")
def number(value: Any, _param: str | None, _subject: Subject) -> bool:
    """Anything that coerces to a number, except the empty string."""
    return value is not None and value != "" and not math.isnan(to_number(value))


@rule("lowercase", category="format")
def lowercase(value: Any, _param: str | None, _subject: Subject) -> bool:
    return isinstance(value, str) and value == value.lower()


@rule("uppercase", category="format")
def uppercase(value: Any, _param: str | None, _subject: Subject) -> bool:
    return isinstance(value, str) and value == value.upper()


@rule("alphaunicode", category="format")
def alphaunicode(value: Any, _param: str | None, _subject: Subject) -> bool:
    """Letters from any script."""
    text = to_text(value)
    return bool(text) and all(char.isalpha() for char in text)


@rule("alphanumunicode", category="format")
def alphanumunicode(value: Any, _param: str | None, _subject: Subject) -> bool:
    """Letters and numbers from any script."""
    text = to_text(value)
    return bool(text) and all(
        char.isalpha() or unicodedata.category(char).startswith("N") for char in text
    )


@rule("multibyte", category="format")
def multibyte(value: Any, _param: str | None, _subject: Subject) -> bool:
    """At least one character outside ASCII."""
    return _NON_ASCII.search(to_text(value)) is not None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


@rule("json", category="format")
def json_text(value: Any, _param: str | None, _subject: Subject) -> bool:
    try:
        json.loads(to_text(value), parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def luhn_valid(digits: str) -> bool:
    """Luhn checksum over a string of decimal digits."""
    total = 0
    double = False
    for char in reversed(digits):
        digit = int(char)
        if double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        double = not double
    return total % 10 == 0


@rule("credit_card", category="format")
def credit_card(value: Any, _param: str | None, _subject: Subject) -> bool:
    """Card number passing the Luhn check; separators are ignored."""
    digits = _NON_DIGITS.sub("", to_text(value))
    return bool(digits) and luhn_valid(digits)
