"""
Base Repository class providing session management for data access.

Unlike a best-effort cache, every repository here is a source of truth:
an unreachable store or a failed statement surfaces as
``PersistenceUnavailableError`` instead of an empty result.
"""

from __future__ import annotations
from typing import Any, Generic, Optional, Type, TypeVar
from sqlalchemy.orm import Session  # type: ignore
from sqlalchemy.exc import SQLAlchemyError  # type: ignore
from core.db import Base, SessionFactory, get_db_session
from shared.exceptions import PersistenceUnavailableError
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Base repository class with session handling and primary-key lookup."""

    def __init__(self, model: Type[T], session_factory: Optional[SessionFactory] = None):
        self.model = model
        self._session_factory = session_factory or get_db_session

    @property
    def repository_name(self) -> str:
        return self.__class__.__name__

    def get_session(self) -> Session:
        """Get database session or raise when the store is not configured."""
        session = self._session_factory()
        if session is None:
            raise PersistenceUnavailableError(self.repository_name)
        return session

    def get_by_id(self, id: Any) -> Optional[T]:
        """Get entity by ID."""
        def query_func(session: Session) -> Optional[T]:
            return session.query(self.model).filter(self.model.id == id).first()

        return self.execute_query(query_func)

    def count(self) -> int:
        """Count total entities."""
        return self.execute_query(lambda session: session.query(self.model).count())

    def execute_query(self, query_func, *args, **kwargs) -> Any:
        """Execute custom query with session management."""
        session = self.get_session()
        try:
            return query_func(session, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Error executing query in {self.repository_name}: {e}")
            session.rollback()
            raise PersistenceUnavailableError(self.repository_name, original_exception=e) from e
        finally:
            session.close()
