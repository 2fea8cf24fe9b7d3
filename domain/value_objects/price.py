"""
Price value object.

Non-negative euro amount used as input to token conversion.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

from shared.constants import PRICE_EQUALITY_TOLERANCE
from shared.exceptions import InvalidArgumentError
from shared.validators import to_finite_decimal, validate_non_negative_decimal


def working_precision(value: Decimal) -> int:
    """Digits needed to hold value exactly down to cents, plus headroom."""
    return max(28, value.adjusted() - min(value.as_tuple().exponent, -2) + 5)


@dataclass(frozen=True, eq=False)
class Price:
    """
    Immutable, non-negative, finite monetary amount in euros.

    Arithmetic preserves precision using Decimal; every result is validated
    again so a Price can never become negative.
    """

    value: Decimal

    def __init__(self, value: Union[float, int, str, Decimal]):
        """
        Raises:
            InvalidArgumentError: If value is negative, NaN or infinite
        """
        object.__setattr__(self, 'value', validate_non_negative_decimal(value, "Price"))

    @classmethod
    def create(cls, value: Union[float, int, str, Decimal]) -> Price:
        return cls(value)

    @classmethod
    def from_string(cls, text: str) -> Price:
        """Parse a price such as "12.50" or "12,50"."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidArgumentError(f"Cannot parse price from: {text!r}", value=text)
        normalized = text.strip().replace('€', '').replace(',', '.').strip()
        try:
            parsed = to_finite_decimal(normalized, "Price")
        except InvalidArgumentError:
            raise InvalidArgumentError(f"Cannot parse price from: {text!r}", value=text)
        return cls(parsed)

    @classmethod
    def zero(cls) -> Price:
        return cls(Decimal('0'))

    def add(self, other: Price) -> Price:
        """Add two prices together."""
        if not isinstance(other, Price):
            raise TypeError(f"Cannot add Price and {type(other)}")
        return Price(self.value + other.value)

    def multiply(self, factor: Union[float, int, Decimal]) -> Price:
        """Multiply price by a factor."""
        return Price(self.value * to_finite_decimal(factor, "Multiplication factor"))

    def __add__(self, other: Price) -> Price:
        return self.add(other)

    def __mul__(self, factor: Union[float, int, Decimal]) -> Price:
        return self.multiply(factor)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Price):
            return False
        return abs(self.value - other.value) < PRICE_EQUALITY_TOLERANCE

    __hash__ = None

    def to_euro_string(self) -> str:
        """Format as Euro string, e.g. "€12,50"."""
        with localcontext() as ctx:
            ctx.prec = working_precision(self.value)
            rounded = self.value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        return f"€{rounded:.2f}".replace('.', ',')

    def __str__(self) -> str:
        return f"{self.value:.2f}"

    def __repr__(self) -> str:
        return f"Price({self.value})"
