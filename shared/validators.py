"""
Reusable validators and validation utilities.

This module provides common validation functions used throughout the application
to ensure data consistency and eliminate validation logic duplication.
"""

import re
from typing import Any, Optional
from decimal import Decimal, InvalidOperation

from shared.constants import EMAIL_PATTERN
from shared.exceptions import InvalidArgumentError


_EMAIL_RE = re.compile(EMAIL_PATTERN)


# =================== NUMERIC VALIDATION ===================

def to_finite_decimal(value: Any, field_name: str = "value") -> Decimal:
    """
    Convert a numeric or textual value to a finite Decimal.

    Floats go through ``str()`` so that 5.4 becomes Decimal("5.4") rather than
    its binary expansion.

    Raises:
        InvalidArgumentError: If value is not numeric, NaN or infinite
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"{field_name} must be numeric, got: {value!r}", value=value)

    try:
        if isinstance(value, Decimal):
            decimal_value = value
        elif isinstance(value, str):
            decimal_value = Decimal(value.strip())
        else:
            decimal_value = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as e:
        raise InvalidArgumentError(f"Invalid {field_name} format: {value!r} ({str(e)})", value=value)

    if not decimal_value.is_finite():
        raise InvalidArgumentError(f"{field_name} must be a finite number: {value}", value=value)

    return decimal_value


def validate_non_negative_decimal(value: Any, field_name: str = "value") -> Decimal:
    """
    Validate a finite, non-negative decimal value.

    Raises:
        InvalidArgumentError: If value is invalid or negative
    """
    decimal_value = to_finite_decimal(value, field_name)

    if decimal_value < 0:
        raise InvalidArgumentError(f"{field_name} cannot be negative: {decimal_value}", value=value)

    return decimal_value


def validate_decimal_range(
    value: Any,
    field_name: str = "value",
    min_value: Decimal = None,
    max_value: Decimal = None
) -> Decimal:
    """
    Validate a finite decimal inside a closed interval.

    Raises:
        InvalidArgumentError: If value is invalid or outside the interval
    """
    decimal_value = to_finite_decimal(value, field_name)

    if min_value is not None and decimal_value < min_value:
        raise InvalidArgumentError(
            f"{field_name} must be between {min_value} and {max_value}: {decimal_value}",
            value=value
        )

    if max_value is not None and decimal_value > max_value:
        raise InvalidArgumentError(
            f"{field_name} must be between {min_value} and {max_value}: {decimal_value}",
            value=value
        )

    return decimal_value


def validate_integer(value: Any, field_name: str = "value") -> int:
    """
    Validate an exact integer (integral Decimals and floats are accepted).

    Raises:
        InvalidArgumentError: If value is not an integer
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    decimal_value = to_finite_decimal(value, field_name)
    if decimal_value != decimal_value.to_integral_value():
        raise InvalidArgumentError(f"{field_name} must be an integer: {value}", value=value)

    return int(decimal_value)


# =================== IDENTITY VALIDATION ===================

def is_valid_email_format(value: Any) -> bool:
    """Check basic local@domain.tld shape without raising."""
    if not isinstance(value, str):
        return False
    return bool(_EMAIL_RE.match(value))


def normalize_identifier(value: Any) -> Optional[str]:
    """Return a stripped identifier string, or None if empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
