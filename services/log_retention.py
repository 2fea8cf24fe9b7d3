"""
Log retention: purge application and audit entries past the retention window.

Run periodically from ``commands/log_maintenance.py``; request handling
never calls this.
"""

from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError  # type: ignore

from core.db import SessionFactory, get_db_session
from core.models import AppLog, AuditLog
from shared.constants import LOG_RETENTION_DAYS
from shared.exceptions import InvalidArgumentError, PersistenceUnavailableError

logger = logging.getLogger(__name__)


def retention_cutoff(retention_days: int, now: Optional[datetime] = None) -> datetime:
    if retention_days < 1:
        raise InvalidArgumentError("Retention must be at least one day", value=retention_days)
    return (now or datetime.utcnow()) - timedelta(days=retention_days)


def purge_expired_logs(
    session_factory: SessionFactory = get_db_session,
    retention_days: int = LOG_RETENTION_DAYS,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    Delete log entries older than ``retention_days``.

    Returns:
        Number of deleted rows per table, e.g. {"app_log": 12, "audit_log": 3}
    """
    cutoff = retention_cutoff(retention_days, now)
    session = session_factory()
    if session is None:
        raise PersistenceUnavailableError("log_retention")

    try:
        deleted_app = (
            session.query(AppLog)
            .filter(AppLog.timestamp_utc < cutoff)
            .delete(synchronize_session=False)
        )
        deleted_audit = (
            session.query(AuditLog)
            .filter(AuditLog.timestamp_utc < cutoff)
            .delete(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Log purge failed: {e}")
        raise PersistenceUnavailableError("log_retention", original_exception=e) from e
    finally:
        session.close()

    logger.info(
        f"Purged {deleted_app} app_log and {deleted_audit} audit_log entries older than {cutoff.isoformat()}"
    )
    return {"app_log": deleted_app, "audit_log": deleted_audit}


def count_expired_logs(
    session_factory: SessionFactory = get_db_session,
    retention_days: int = LOG_RETENTION_DAYS,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """Rows a purge with the same arguments would delete."""
    cutoff = retention_cutoff(retention_days, now)
    session = session_factory()
    if session is None:
        raise PersistenceUnavailableError("log_retention")

    try:
        return {
            "app_log": session.query(AppLog).filter(AppLog.timestamp_utc < cutoff).count(),
            "audit_log": session.query(AuditLog).filter(AuditLog.timestamp_utc < cutoff).count(),
        }
    except SQLAlchemyError as e:
        raise PersistenceUnavailableError("log_retention", original_exception=e) from e
    finally:
        session.close()
