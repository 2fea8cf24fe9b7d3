"""Facade re-export for ORM models.

All real model definitions live under core/db_models/.
"""

# flake8: noqa

from core.db import Base

from core.db_models.user import User
from core.db_models.lending import TokenLending
from core.db_models.logs import AppLog, AuditLog

__all__ = [
    # Base
    "Base",
    # Users
    "User",
    # Lending
    "TokenLending",
    # Logs
    "AppLog",
    "AuditLog",
]
