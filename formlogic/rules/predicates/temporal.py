"""Date, time and timezone rules.

``datetime`` takes an optional layout written with reference-date tokens:
``2006`` year, ``01`` month, ``02`` day, ``15`` hour, ``04`` minute,
``05`` second and so on. ``datetime:2006-01-02`` accepts ``2023-12-31``.
The layout is checked for shape only; ``2023-13-45`` matches it too.
"""

import re
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from formlogic.coercion import to_text
from formlogic.rules.models import Subject
from formlogic.rules.registry import rule

# Applied in order, first occurrence only
LAYOUT_TOKENS: tuple[tuple[str, str], ...] = (
    ("2006", r"\d{4}"),
    ("06", r"\d{2}"),
    ("01", r"\d{2}"),
    ("02", r"\d{2}"),
    ("15", r"\d{2}"),
    ("03", r"\d{2}"),
    ("04", r"\d{2}"),
    ("05", r"\d{2}"),
    ("PM", "(?:AM|PM)"),
    ("MST", "[A-Z]{3}"),
    ("Z0700", r"[+-]\d{4}"),
)

# Tried after ISO 8601 when no layout is given
FALLBACK_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%a, %d %b %Y %H:%M:%S %Z",
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
)


def layout_to_pattern(layout: str) -> re.Pattern[str]:
    """Translate a reference-date layout into a whole-value pattern."""
    pattern = re.escape(layout)
    for token, replacement in LAYOUT_TOKENS:
        pattern = pattern.replace(token, replacement, 1)
    return re.compile(pattern, re.ASCII)


def parses_as_date(text: str) -> bool:
    """Check that text is a calendar date or timestamp in a common format."""
    text = text.strip()
    if not text:
        return False

    try:
        datetime.fromisoformat(text)
        return True
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            datetime.strptime(text, fmt)
            return True
        except ValueError:
            continue

    return False


@rule("datetime", category="temporal")
def date_time(value: Any, param: str | None, _subject: Subject) -> bool:
    text = to_text(value)
    if not param:
        return parses_as_date(text)
    return layout_to_pattern(param).fullmatch(text) is not None


@rule("timezone", category="temporal")
def timezone(value: Any, _param: str | None, _subject: Subject) -> bool:
    """IANA timezone name known to the zone database."""
    try:
        ZoneInfo(to_text(value))
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True
