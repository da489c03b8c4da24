"""
UTC datetime utilities and tenant date-format rendering.

All stored datetimes are timezone-aware UTC. Display formatting uses the
moment-style patterns tenants configure (e.g. "MM/DD/YYYY").
"""

import re
from datetime import UTC, date, datetime

# Longest tokens first so "YYYY" wins over "YY" and "MMMM" over "MM".
_MOMENT_TOKENS: dict[str, str] = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "DD": "%d",
    "Do": "%d",
    "dddd": "%A",
    "ddd": "%a",
    "HH": "%H",
    "hh": "%I",
    "mm": "%M",
    "ss": "%S",
    "A": "%p",
}
_MOMENT_RE = re.compile("|".join(sorted(_MOMENT_TOKENS, key=len, reverse=True)))


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def moment_to_strftime(pattern: str) -> str:
    """
    Translate a moment.js style date pattern to a strftime pattern.

    Unknown characters (separators, literal text) pass through unchanged.

    Args:
        pattern: e.g. "MM/DD/YYYY" or "DD-MMM-YYYY"

    Returns:
        Equivalent strftime pattern, e.g. "%m/%d/%Y"
    """
    return _MOMENT_RE.sub(lambda m: _MOMENT_TOKENS[m.group(0)], pattern)


def format_date(value: date | datetime | None, pattern: str, empty: str = "") -> str:
    """
    Render a date with a moment-style pattern; None renders as `empty`.

    Args:
        value: date or datetime to render
        pattern: moment-style pattern (e.g. "YYYY-MM-DD")
        empty: value returned when `value` is None

    Returns:
        Formatted string
    """
    if value is None:
        return empty
    return value.strftime(moment_to_strftime(pattern))
