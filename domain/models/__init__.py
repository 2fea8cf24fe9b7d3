"""
Domain models - Pure business entities without infrastructure dependencies.

These models represent core business concepts and rules independent
of database schemas, external APIs, or framework specifics.
"""

from domain.models.lending import AcceptanceStatus, LendingRecord
from domain.models.session import Role, UserSession
from domain.models.token_calculation import TokenCalculation

__all__ = [
    "AcceptanceStatus",
    "LendingRecord",
    "Role",
    "UserSession",
    "TokenCalculation",
]
