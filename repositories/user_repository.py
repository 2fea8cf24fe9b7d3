"""
User Repository for handling user-related database operations.
"""

from __future__ import annotations
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Session  # type: ignore

from repositories.base_repository import BaseRepository
from core.db import SessionFactory
from core.models import User
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        super().__init__(User, session_factory)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (already normalized) email address."""
        def query_func(session: Session) -> Optional[User]:
            return (
                session.query(User)
                .filter(User.email == email)
                .first()
            )

        return self.execute_query(query_func)

    def update_last_login(self, user_id: str) -> bool:
        """Update user's last login timestamp."""
        def query_func(session: Session) -> bool:
            user = session.query(User).filter(User.id == user_id).first()
            if user:
                user.last_login_utc = datetime.utcnow()
                session.commit()
                return True
            return False

        return bool(self.execute_query(query_func))
