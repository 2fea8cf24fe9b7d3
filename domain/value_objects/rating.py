"""
Rating value object.

Represents a restaurant rating on a 0-5 scale with tolerant comparison
and a distinct "not rated yet" variant.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from shared.constants import RATING_MIN, RATING_MAX, RATING_EQUALITY_TOLERANCE
from shared.exceptions import InvalidArgumentError
from shared.validators import to_finite_decimal, validate_decimal_range


@dataclass(frozen=True, eq=False)
class Rating:
    """
    Immutable rating in the closed interval [0, 5].

    ``Rating.unrated()`` carries value 0 like an explicit zero rating but is
    flagged ``is_rated = False`` and never compares equal to a rated value.
    """

    value: Decimal
    is_rated: bool

    def __init__(self, value: Union[float, int, str, Decimal], is_rated: bool = True):
        """
        Create Rating with range validation.

        Raises:
            InvalidArgumentError: If value is not finite or outside [0, 5]
        """
        decimal_value = validate_decimal_range(
            value, "Rating", min_value=RATING_MIN, max_value=RATING_MAX
        )
        object.__setattr__(self, 'value', decimal_value)
        object.__setattr__(self, 'is_rated', bool(is_rated))

    @classmethod
    def create(cls, value: Union[float, int, str, Decimal]) -> Rating:
        """Factory for an explicit rating."""
        return cls(value)

    @classmethod
    def from_string(cls, text: str) -> Rating:
        """Parse a rating from text such as "4.5"."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidArgumentError(f"Cannot parse rating from: {text!r}", value=text)
        try:
            parsed = to_finite_decimal(text, "Rating")
        except InvalidArgumentError:
            raise InvalidArgumentError(f"Cannot parse rating from: {text!r}", value=text)
        return cls.create(parsed)

    @classmethod
    def unrated(cls) -> Rating:
        """Sentinel for "no rating yet"."""
        return cls(Decimal('0'), is_rated=False)

    @property
    def stars(self) -> int:
        """Whole stars 0-5, rounding half away from zero (2.5 -> 3)."""
        return int(self.value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rating):
            return False
        if self.is_rated != other.is_rated:
            return False
        return abs(self.value - other.value) < RATING_EQUALITY_TOLERANCE

    # Tolerant equality is not transitive, so ratings are not hashable.
    __hash__ = None

    def __str__(self) -> str:
        return f"{self.value:.2f}" if self.is_rated else "unrated"

    def __repr__(self) -> str:
        if not self.is_rated:
            return "Rating.unrated()"
        return f"Rating({self.value})"
