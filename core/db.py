from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy import create_engine  # type: ignore
from sqlalchemy.engine import Engine  # type: ignore
from sqlalchemy.exc import SQLAlchemyError  # type: ignore
from sqlalchemy.orm import Session, sessionmaker, declarative_base  # type: ignore

from config import get_config

logger = logging.getLogger(__name__)

# DATABASE_URL example: postgresql+psycopg2://user:password@db:5432/token_ledger
DATABASE_URL = get_config().database.url

Base = declarative_base()

SessionFactory = Callable[[], Optional[Session]]


def _make_engine(url: str) -> Optional[Engine]:
    if not url:
        return None
    db_config = get_config().database
    try:
        if url.startswith("sqlite"):
            return create_engine(url, echo=False, future=True)
        # Tune pool to avoid connection starvation and long waits
        return create_engine(
            url,
            pool_pre_ping=True,
            echo=False,
            future=True,
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
        )
    except (SQLAlchemyError, ValueError, ImportError) as e:
        logger.error(f"Failed to create database engine: {e}")
        return None


engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine) if engine is not None else None


def get_db_session() -> Optional[Session]:
    if SessionLocal is None:
        return None
    return SessionLocal()


def init_schema(bind: Optional[Engine] = None) -> bool:
    """Create missing tables on the given (or default) engine."""
    target = bind or engine
    if target is None:
        return False
    # Import models so every table is registered on Base.metadata
    import core.models  # noqa: F401
    Base.metadata.create_all(bind=target)
    return True
