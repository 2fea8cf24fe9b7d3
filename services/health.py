"""Database health probe backing GET /api/health."""

from __future__ import annotations
import logging
from typing import Any, Dict

from sqlalchemy import inspect, text  # type: ignore

from core.db import SessionFactory, get_db_session

logger = logging.getLogger(__name__)


def check_database_health(session_factory: SessionFactory = get_db_session) -> Dict[str, Any]:
    """
    Probe the database with a trivial query.

    Never raises: any failure becomes an unhealthy report.
    """
    session = None
    try:
        session = session_factory()
        if session is None:
            return {"healthy": False, "tables": 0, "message": "Database is not configured"}

        session.execute(text("SELECT 1"))
        tables = inspect(session.get_bind()).get_table_names()
        return {
            "healthy": True,
            "tables": len(tables),
            "message": "Database connection successful",
        }
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return {"healthy": False, "tables": 0, "message": f"Database connection failed: {e}"}
    finally:
        if session is not None:
            session.close()
