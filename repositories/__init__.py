"""
Repository layer for data access abstraction.

This module provides a clean separation between business logic and database operations,
following the Repository pattern for better testability and maintainability.
"""

from repositories.base_repository import BaseRepository
from repositories.lending_repository import LendingRepository
from repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "LendingRepository",
    "UserRepository",
]
