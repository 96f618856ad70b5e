"""
Validation and sanitization rules.

A rule is either a *sanitizer* (returns a transformed value) or a
*validator* (checks the current value and carries the message reported on
failure). Rules never raise on bad input and never touch storage.
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional

from locallibrary.common.utils.date_utils import as_utc, parse_iso8601

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
}
# An ampersand that does not already start one of the entities produced above
_BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|quot|#x27|#x2F|#x5C|#96);)")
_ALPHANUMERIC = re.compile(r"[0-9A-Za-z]*")


def _to_str(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (date, datetime, list)):
        return value
    return str(value)


class Rule:
    """Base rule. Lists are handled element by element."""


class Sanitizer(Rule):
    def sanitize(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self.sanitize_one(_to_str(item)) for item in value]
        return self.sanitize_one(_to_str(value))

    def sanitize_one(self, value: Any) -> Any:
        raise NotImplementedError


class Validator(Rule):
    def __init__(self, message: Optional[str] = None):
        self.message = message

    def check(self, value: Any) -> bool:
        if isinstance(value, list):
            return all(self.check_one(item) for item in value)
        return self.check_one(value)

    def check_one(self, value: Any) -> bool:
        raise NotImplementedError


class Trim(Sanitizer):
    def sanitize_one(self, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class Escape(Sanitizer):
    """
    Replace HTML-significant characters with entities.

    Existing entities are not escaped a second time, so applying the rule to
    its own output is a no-op.
    """

    def sanitize_one(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = _BARE_AMPERSAND.sub("&amp;", value)
        return "".join(_ESCAPES.get(ch, ch) for ch in value)


class ToList(Sanitizer):
    """Wrap a single value in a list; missing values become an empty list."""

    def sanitize(self, value: Any) -> Any:
        if value is None or value == "":
            return []
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]


class ToDate(Sanitizer):
    """
    Convert an ISO-8601 string to a UTC datetime (or a date when
    ``date_only``). Unparseable input becomes None.
    """

    def __init__(self, date_only: bool = False):
        self.date_only = date_only

    def sanitize_one(self, value: Any) -> Any:
        if isinstance(value, datetime):
            return as_utc(value).date() if self.date_only else value
        if isinstance(value, date):
            return value
        parsed = parse_iso8601(value)
        if parsed is None:
            return None
        return as_utc(parsed).date() if self.date_only else parsed


class IsLength(Validator):
    def __init__(self, min: int = 0, max: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message)
        self.min = min
        self.max = max

    def check_one(self, value: Any) -> bool:
        length = len(value) if isinstance(value, str) else 0
        if length < self.min:
            return False
        return self.max is None or length <= self.max


class IsAlphanumeric(Validator):
    """
    Reject any character outside ``[0-9A-Za-z]``. An empty value passes;
    emptiness is the business of IsLength.
    """

    def check_one(self, value: Any) -> bool:
        return isinstance(value, str) and _ALPHANUMERIC.fullmatch(value) is not None


class IsISO8601(Validator):
    def check_one(self, value: Any) -> bool:
        if isinstance(value, (date, datetime)):
            return True
        return parse_iso8601(value) is not None


class IsIn(Validator):
    def __init__(self, choices: Iterable[str], message: Optional[str] = None):
        super().__init__(message)
        self.choices = list(choices)

    def check_one(self, value: Any) -> bool:
        return value in self.choices
