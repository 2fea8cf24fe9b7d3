"""
Database-backed implementation of the Logger port.

Application entries go to ``app_log`` and audit entries to ``audit_log``.
A failed write is reported on the process logger and swallowed so the
calling operation always completes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from core.correlation import get_correlation_id
from core.db import SessionFactory, get_db_session
from core.models import AppLog, AuditLog
from services.ports import Logger, LogContext
from shared.constants import AUDIT_MESSAGE_PREFIX, FALLBACK_LOGGER_NAME
from shared.exceptions import InvalidArgumentError

_fallback = logging.getLogger(FALLBACK_LOGGER_NAME)

_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Context keys promoted to dedicated audit_log columns
_AUDIT_COLUMNS = ("target_user_id", "ip_address", "user_agent")


def _dump_context(context: Optional[Dict[str, Any]]) -> Optional[str]:
    if not context:
        return None
    return json.dumps(context, default=str, sort_keys=True)


class DatabaseLogger(Logger):
    """Writes structured log and audit entries through SQLAlchemy."""

    def __init__(self, session_factory: SessionFactory = get_db_session, echo_to_console: bool = False):
        self._session_factory = session_factory
        self._echo = echo_to_console

    # ---------------- Logger port ----------------

    def info(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        self._log("info", message, context, user_id)

    def warn(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        self._log("warn", message, context, user_id)

    def error(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        self._log("error", message, context, user_id)

    def debug(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        self._log("debug", message, context, user_id)

    def audit(self, action: str, context: LogContext, user_id: str) -> None:
        if not user_id:
            raise InvalidArgumentError("Audit entries must be attributed to a user", value=action)

        metadata = dict(context or {})
        columns = {key: metadata.pop(key, None) for key in _AUDIT_COLUMNS}
        correlation_id = get_correlation_id()

        if self._echo:
            _fallback.info(f"[AUDIT] {action} by {user_id} {_dump_context(metadata) or ''}".rstrip())

        def write(session) -> None:
            session.add(AuditLog(
                user_id=str(user_id),
                action=action,
                target_user_id=columns["target_user_id"],
                metadata_json=_dump_context(metadata),
                ip_address=columns["ip_address"],
                user_agent=columns["user_agent"],
                correlation_id=correlation_id,
            ))

        self._write(write, "info", f"{AUDIT_MESSAGE_PREFIX}{action}", context)

    # ---------------- internals ----------------

    def _log(self, level: str, message: str, context: Optional[LogContext], user_id: Optional[str]) -> None:
        correlation_id = get_correlation_id()

        if self._echo:
            suffix = f" {_dump_context(context)}" if context else ""
            _fallback.log(_STDLIB_LEVELS[level], f"[{level.upper()}] {message}{suffix}")

        def write(session) -> None:
            session.add(AppLog(
                level=level,
                message=message,
                context=_dump_context(context),
                user_id=str(user_id) if user_id else None,
                correlation_id=correlation_id,
            ))

        self._write(write, level, message, context)

    def _write(self, add_entry, level: str, message: str, context: Optional[LogContext]) -> None:
        session = None
        try:
            session = self._session_factory()
            if session is None:
                raise RuntimeError("database session unavailable")
            add_entry(session)
            session.commit()
        except Exception as e:
            if session is not None:
                try:
                    session.rollback()
                except Exception:
                    _fallback.debug("Rollback after failed log write also failed", exc_info=True)
            _fallback.error(f"[DatabaseLogger] Failed to write to database: {e}")
            _fallback.log(
                _STDLIB_LEVELS.get(level, logging.INFO),
                f"[{level.upper()}] {message} {_dump_context(context) or ''}".rstrip(),
            )
        finally:
            if session is not None:
                session.close()
