"""
Infrastructure Services - Adapters behind the application ports.

This module contains the concrete implementations of the ports the
application services consume: the database-backed logger and the
JWT/bcrypt authentication adapter.
"""

from services.infrastructure.database_logger import DatabaseLogger
from services.infrastructure.authentication_service import AuthenticationService

__all__ = [
    "DatabaseLogger",
    "AuthenticationService",
]
