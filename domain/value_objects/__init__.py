"""
Value Objects for domain models.

Value objects are immutable objects that represent concepts in the domain
that are defined by their attributes rather than their identity.
"""

from domain.value_objects.email import Email
from domain.value_objects.price import Price
from domain.value_objects.rating import Rating
from domain.value_objects.token_count import TokenCount

__all__ = [
    "Email",
    "Price",
    "Rating",
    "TokenCount",
]
