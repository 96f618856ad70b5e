"""
Per-field rule chains and the form validator that runs them.

Usage::

    form = FormValidator(
        body("first_name").trim().is_length(min=1).with_message("...").escape(),
        body("date_of_birth", "Invalid date of birth").optional().is_iso8601().to_date(date_only=True),
    )
    result = form.validate({"first_name": " Jo ", "date_of_birth": ""})
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from locallibrary.catalog.validation.rules import (
    Escape,
    IsAlphanumeric,
    IsIn,
    IsISO8601,
    IsLength,
    Rule,
    ToDate,
    ToList,
    Trim,
    Validator,
)

DEFAULT_MESSAGE = "Invalid value"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    value: Any = None


@dataclass
class ValidationResult:
    values: Dict[str, Any] = field(default_factory=dict)
    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def errors_for(self, name: str) -> List[FieldError]:
        return [error for error in self.errors if error.field == name]


class FieldChain:
    """An ordered list of rules for a single form field."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        self.message = message
        self.rules: List[Rule] = []
        self.is_optional = False

    def _add(self, rule: Rule) -> "FieldChain":
        self.rules.append(rule)
        return self

    # Sanitizers
    def trim(self) -> "FieldChain":
        return self._add(Trim())

    def escape(self) -> "FieldChain":
        return self._add(Escape())

    def to_list(self) -> "FieldChain":
        return self._add(ToList())

    def to_date(self, date_only: bool = False) -> "FieldChain":
        return self._add(ToDate(date_only=date_only))

    # Validators
    def is_length(self, min: int = 0, max: Optional[int] = None) -> "FieldChain":
        return self._add(IsLength(min=min, max=max))

    def not_empty(self) -> "FieldChain":
        return self._add(IsLength(min=1))

    def is_alphanumeric(self) -> "FieldChain":
        return self._add(IsAlphanumeric())

    def is_iso8601(self) -> "FieldChain":
        return self._add(IsISO8601())

    def is_in(self, choices: Iterable[str]) -> "FieldChain":
        return self._add(IsIn(choices))

    def with_message(self, message: str) -> "FieldChain":
        """Set the message of the most recently added validator."""
        for rule in reversed(self.rules):
            if isinstance(rule, Validator):
                rule.message = message
                return self
        raise ValueError(f"with_message() on '{self.name}' has no validator to attach to")

    @property
    def collects_list(self) -> bool:
        return any(isinstance(rule, ToList) for rule in self.rules)

    def optional(self) -> "FieldChain":
        """Skip the whole chain when the submitted value is falsy."""
        self.is_optional = True
        return self

    def run(self, raw: Any) -> Tuple[bool, Any, List[FieldError]]:
        """
        Apply the chain to ``raw``.

        Returns ``(present, value, errors)``; ``present`` is False when an
        optional field was skipped and must be left out of the cleaned set.
        A repeated field only keeps its last value unless the chain collects
        a list.
        """
        if isinstance(raw, list) and not self.collects_list:
            raw = raw[-1] if raw else None

        if self.is_optional and not raw:
            return False, None, []

        value = raw
        errors: List[FieldError] = []
        for rule in self.rules:
            if isinstance(rule, Validator):
                if not rule.check(value):
                    message = rule.message or self.message or DEFAULT_MESSAGE
                    errors.append(FieldError(self.name, message, value))
            else:
                value = rule.sanitize(value)
        return True, value, errors


def body(name: str, message: Optional[str] = None) -> FieldChain:
    return FieldChain(name, message)


class FormValidator:
    """Runs a fixed set of field chains over a submitted form."""

    def __init__(self, *chains: FieldChain):
        self.chains = list(chains)

    @property
    def fields(self) -> List[str]:
        return [chain.name for chain in self.chains]

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        result = ValidationResult()
        for chain in self.chains:
            present, value, errors = chain.run(data.get(chain.name))
            if present:
                result.values[chain.name] = value
            result.errors.extend(errors)
        return result
