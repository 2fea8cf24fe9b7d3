"""
Ports consumed by the application services.

Infrastructure provides the concrete implementations; services receive them
through their constructors.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from domain.models.session import UserSession


LogContext = Dict[str, Any]


class Logger(ABC):
    """Structured application log plus a mandatory-attribution audit trail."""

    @abstractmethod
    def info(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def warn(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def error(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def debug(self, message: str, context: Optional[LogContext] = None, user_id: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def audit(self, action: str, context: LogContext, user_id: str) -> None:
        """Record a security-relevant event; user_id is required."""
        ...

    def log_authz_failure(
        self,
        user_id: str,
        action: str,
        reason: str,
        target_user_id: Optional[str] = None,
    ) -> None:
        self.audit(f"AUTHZ_FAILURE_{action}", {"reason": reason, "target_user_id": target_user_id}, user_id)

    def log_lending_operation(
        self,
        user_id: str,
        operation: str,
        lending_id: int,
        metadata: Optional[LogContext] = None,
    ) -> None:
        self.audit(f"LENDING_{operation.upper()}", {"lending_id": lending_id, **(metadata or {})}, user_id)


class AuthenticationPort(ABC):
    """Resolves and establishes principals from session tokens."""

    @abstractmethod
    def get_current_session(self, token: Optional[str]) -> Optional[UserSession]:
        ...

    @abstractmethod
    def require_authentication(self, token: Optional[str]) -> UserSession:
        """Raises UnauthorizedError when no session can be resolved."""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> UserSession:
        ...

    @abstractmethod
    def sign_out(self, session: Optional[UserSession]) -> None:
        ...
