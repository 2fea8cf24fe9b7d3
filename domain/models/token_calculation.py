"""
Token calculation result.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict


@dataclass(frozen=True)
class TokenCalculation:
    """
    Result of converting one restaurant price into tokens.

    token_count: whole tokens needed to cover the price
    change_due: overpayment returned once the tokens are redeemed
    real_amount_paid: net cost after token purchase minus change
    """

    token_count: int
    change_due: Decimal
    real_amount_paid: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token_count": self.token_count,
            "change_due": float(self.change_due),
            "real_amount_paid": float(self.real_amount_paid),
        }
