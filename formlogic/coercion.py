"""Value coercion shared by the expression evaluator and rule predicates.

Form values arrive loosely typed: strings from text inputs, booleans from
single checkboxes, lists from checkbox groups, ``None`` from empty radio
groups. Expressions and validation rules compare them using the conversion
rules of the browser scripting environment the forms run in, so those rules
are implemented here once:

- ``to_number`` never raises; anything non-numeric becomes NaN, and every
  ordered comparison against NaN is False.
- ``to_text`` renders values the way string concatenation would.
- ``strict_equals`` / ``loose_equals`` implement identity-of-type and
  coercing equality respectively.
"""

import math
import re
from collections.abc import Mapping
from typing import Any


class _Undefined:
    """Marker for a value that was never set.

    Distinct from ``None`` (an explicit null): ``null === undefined`` is
    False while ``null == undefined`` is True.
    """

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

_INFINITIES = {
    "Infinity": math.inf,
    "+Infinity": math.inf,
    "-Infinity": -math.inf,
}
# ASCII digits only; other scripts' digits are not numeric
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED_RE = re.compile(r"0([xXoObB])([0-9a-fA-F]+)", re.ASCII)
_BASES = {"x": 16, "o": 8, "b": 2}


def is_number(value: Any) -> bool:
    """Check for a real number, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_nullish(value: Any) -> bool:
    """Check for ``None`` or ``UNDEFINED``."""
    return value is None or value is UNDEFINED


def _number_from_text(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if _DECIMAL_RE.fullmatch(text):
        return float(text)

    match = _PREFIXED_RE.fullmatch(text)
    if match:
        try:
            return float(int(match.group(2), _BASES[match.group(1).lower()]))
        except ValueError:
            return math.nan
    return math.nan


def to_number(value: Any) -> float:
    """Coerce a value to a float, returning NaN when it is not numeric."""
    if value is None:
        return 0.0
    if value is UNDEFINED:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        return _number_from_text(value)
    if isinstance(value, (list, tuple)):
        return _number_from_text(to_text(value))
    return math.nan


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_text(value: Any) -> str:
    """Render a value as text."""
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join("" if is_nullish(item) else to_text(item) for item in value)
    return str(value)


def is_truthy(value: Any) -> bool:
    """Truthiness with empty collections counting as true."""
    if is_nullish(value):
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (str, bool)) or is_number(value)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without type conversion."""
    if is_number(left) and is_number(right):
        return left == right
    if is_nullish(left) or is_nullish(right):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    # Objects compare by identity
    return left is right


def loose_equals(left: Any, right: Any) -> bool:
    """Equality with type conversion between strings, numbers and booleans."""
    if is_nullish(left) or is_nullish(right):
        return is_nullish(left) and is_nullish(right)

    if _is_primitive(left) and _is_primitive(right):
        if type(left) is type(right) or (is_number(left) and is_number(right)):
            return strict_equals(left, right)
        return to_number(left) == to_number(right)

    if _is_primitive(left):
        return loose_equals(left, to_text(right))
    if _is_primitive(right):
        return loose_equals(to_text(left), right)
    return left is right


def parse_number_literal(text: str) -> int | float | None:
    """Parse a finite numeric literal, or return None."""
    if not text.strip():
        return None
    number = _number_from_text(text)
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number
