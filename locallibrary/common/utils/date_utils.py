"""
Date and time utility functions.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

# YYYY-MM-DD, optionally followed by a time and a UTC offset
ISO8601_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso8601(value: str) -> Optional[datetime]:
    """
    Parse an extended ISO-8601 calendar date or date-time.

    Date-only values and naive date-times are taken as UTC.

    Returns:
        An aware datetime, or None when the string is not a valid date.
    """
    if not isinstance(value, str) or not ISO8601_PATTERN.match(value):
        return None

    text = value
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # +0530 -> +05:30
    text = re.sub(r"([+-]\d{2})(\d{2})$", r"\1:\2", text)
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    text = re.sub(r"\.(\d{1,6})", lambda m: "." + m.group(1).ljust(6, "0"), text)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def as_utc(value: Union[date, datetime]) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def format_date_med(value: Optional[Union[date, datetime]]) -> str:
    """
    Format as a medium date, e.g. ``Oct 6, 2014``. Datetimes are read in UTC.

    Returns an empty string for None.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = as_utc(value).date()
    return f"{value:%b} {value.day}, {value.year}"


def format_iso_date(value: Optional[Union[date, datetime]]) -> str:
    """Format as ``YYYY-MM-DD`` (UTC for datetimes); empty string for None."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = as_utc(value).date()
    return value.isoformat()
