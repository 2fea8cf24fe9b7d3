"""
Email value object.

Validated, normalized email address used as the sign-in identity.
"""

from __future__ import annotations
from dataclasses import dataclass

from shared.exceptions import InvalidArgumentError
from shared.validators import is_valid_email_format


@dataclass(frozen=True)
class Email:
    """
    Immutable email address stored in normalized (trimmed, lower-cased) form.

    Two emails are equal iff their normalized forms are identical.
    """

    value: str

    def __init__(self, value: str):
        """
        Create Email with validation and normalization.

        Raises:
            InvalidArgumentError: If value does not look like local@domain.tld
        """
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Invalid email address: {value!r}", value=value)

        normalized = value.strip().lower()
        if not is_valid_email_format(normalized):
            raise InvalidArgumentError(f"Invalid email address: {value!r}", value=value)

        object.__setattr__(self, 'value', normalized)

    @classmethod
    def create(cls, value: str) -> Email:
        """Factory method mirroring the other value objects."""
        return cls(value)

    @staticmethod
    def is_valid(value: str) -> bool:
        """Check whether value would be accepted, without raising."""
        return isinstance(value, str) and is_valid_email_format(value.strip().lower())

    @property
    def local_part(self) -> str:
        return self.value.split('@', 1)[0]

    @property
    def domain(self) -> str:
        return self.value.split('@', 1)[1]

    def __str__(self) -> str:
        return self.value
