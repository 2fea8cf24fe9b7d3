"""
TokenCount value object.

A signed whole number of tokens: positive when lent to someone,
negative when borrowed from someone.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union
from decimal import Decimal

from shared.validators import validate_integer


@dataclass(frozen=True, order=True)
class TokenCount:
    """Immutable integer token amount."""

    value: int

    def __init__(self, value: Union[int, str, Decimal]):
        object.__setattr__(self, 'value', validate_integer(value, "Token count"))

    @classmethod
    def create(cls, value: Union[int, str, Decimal]) -> TokenCount:
        return cls(value)

    @classmethod
    def zero(cls) -> TokenCount:
        return cls(0)

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def absolute_value(self) -> int:
        return abs(self.value)

    def add(self, other: TokenCount) -> TokenCount:
        return TokenCount(self.value + other.value)

    def subtract(self, other: TokenCount) -> TokenCount:
        return TokenCount(self.value - other.value)

    def negate(self) -> TokenCount:
        return TokenCount(-self.value)

    def __add__(self, other: TokenCount) -> TokenCount:
        return self.add(other)

    def __sub__(self, other: TokenCount) -> TokenCount:
        return self.subtract(other)

    def __neg__(self) -> TokenCount:
        return self.negate()

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
