"""
Domain Services - Pure business logic layer.

This module contains services that implement core business rules and domain logic,
independent of external concerns like databases, APIs, or UI frameworks.
"""

from services.domain import authorization_rules
from services.domain import lending_state_machine
from services.domain.token_calculator import convert, calculate_token_count, calculate_euro_value

__all__ = [
    "authorization_rules",
    "lending_state_machine",
    "convert",
    "calculate_token_count",
    "calculate_euro_value",
]
