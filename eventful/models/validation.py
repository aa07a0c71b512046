"""
Field-keyed validation results shared by all models.
"""

import math
from decimal import Decimal
from typing import Dict, Iterator, List, Tuple


class ValidationErrors:
    """
    Collection of validation messages keyed by field name.

    Looking up a field with no messages returns an empty list, so callers can
    write ``errors["name"]`` without checking membership first.
    """

    def __init__(self):
        self._messages: Dict[str, List[str]] = {}

    def add(self, field: str, message: str) -> None:
        """Record a violation for a field."""
        self._messages.setdefault(field, []).append(message)

    def __getitem__(self, field: str) -> List[str]:
        return list(self._messages.get(field, []))

    def __contains__(self, field: str) -> bool:
        return bool(self._messages.get(field))

    def __bool__(self) -> bool:
        return any(self._messages.values())

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        for field, messages in self._messages.items():
            for message in messages:
                yield field, message

    def __repr__(self):
        return f"<ValidationErrors({self._messages!r})>"

    @property
    def fields(self) -> List[str]:
        return [field for field, messages in self._messages.items() if messages]

    def to_dict(self) -> Dict[str, List[str]]:
        return {field: list(messages) for field, messages in self._messages.items() if messages}

    def full_messages(self) -> List[str]:
        """Human readable messages, e.g. ``"Name can't be blank"``."""
        return [f"{field.replace('_', ' ').capitalize()} {message}" for field, message in self]


class RecordInvalid(Exception):
    """Raised by the raising persistence operations when validation fails."""

    def __init__(self, record, errors: ValidationErrors):
        self.record = record
        self.errors = errors
        super().__init__(f"Validation failed: {', '.join(errors.full_messages())}")


class ValidatedModel:
    """
    Mixin giving models a non-raising validation API.

    Subclasses implement ``validate()``; it must be pure and return a fresh
    ``ValidationErrors``.
    """

    _errors = None

    def validate(self) -> ValidationErrors:
        raise NotImplementedError

    @property
    def errors(self) -> ValidationErrors:
        if self._errors is None:
            self._errors = ValidationErrors()
        return self._errors

    def is_valid(self) -> bool:
        """Run validation, keep the result on ``errors`` and report success."""
        self._errors = self.validate()
        return not self._errors


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_number(value) -> bool:
    """Finite int, float or Decimal. Booleans, NaN and infinities are not numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return False


def is_integer(value) -> bool:
    """An int, or a Decimal with no fractional part. Floats never count."""
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return isinstance(value, int) and not isinstance(value, bool)
