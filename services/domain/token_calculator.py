"""
Token Calculator - converts restaurant prices into meal tokens.

One token is bought for TOKEN_COST and redeemed at TOKEN_VALUE. For a price p:

    token_count      = floor(p / TOKEN_VALUE) + (1 if p mod TOKEN_VALUE > 0 else 0)
    change_due       = token_count * TOKEN_VALUE - p
    real_amount_paid = token_count * TOKEN_COST - change_due

All arithmetic is Decimal; change and real-paid are rounded half-up to cents.
Precision grows with the price so very large prices stay exact.
The functions here are pure: no I/O and no logging.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

from domain.models.token_calculation import TokenCalculation
from domain.value_objects.price import Price, working_precision
from domain.value_objects.token_count import TokenCount
from shared.constants import TOKEN_COST, TOKEN_VALUE, CURRENCY_QUANTUM
from shared.validators import validate_non_negative_decimal


PriceInput = Union[Price, Decimal, int, float, str]


def _to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def _price_value(price: PriceInput) -> Decimal:
    if isinstance(price, Price):
        return price.value
    return validate_non_negative_decimal(price, "Price")


def calculate_token_count(price: PriceInput) -> int:
    """Minimum number of whole tokens whose redemption value covers price."""
    value = _price_value(price)
    with localcontext() as ctx:
        ctx.prec = working_precision(value)
        whole, remainder = divmod(value, TOKEN_VALUE)
    return int(whole) + (1 if remainder > 0 else 0)


def convert(price: PriceInput) -> TokenCalculation:
    """
    Convert a price into token count, change due and real amount paid.

    Raises:
        InvalidArgumentError: If price is negative, NaN or infinite
    """
    value = _price_value(price)
    token_count = calculate_token_count(value)

    with localcontext() as ctx:
        ctx.prec = working_precision(value)
        change_due = token_count * TOKEN_VALUE - value
        real_amount_paid = token_count * TOKEN_COST - change_due
        return TokenCalculation(
            token_count=token_count,
            change_due=_to_cents(change_due),
            real_amount_paid=_to_cents(real_amount_paid),
        )


def calculate_euro_value(tokens: TokenCount) -> Price:
    """Redemption value of a token amount, regardless of its sign."""
    return Price(tokens.absolute_value * TOKEN_VALUE)

