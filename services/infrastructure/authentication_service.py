"""
Authentication adapter: bcrypt credentials and signed JWT session tokens.

The token only carries the user id; the role is re-read from the user row
every time a token is resolved so that role changes apply immediately.
"""

from __future__ import annotations
import logging
from typing import Optional

from config.base import AuthConfig
from domain.models.session import Role, UserSession
from domain.value_objects.email import Email
from repositories.user_repository import UserRepository
from services.ports import AuthenticationPort, Logger
from shared.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    UnauthorizedError,
)
from utils.auth import mint_jwt_token, subject_user_id, verify_jwt_token, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthenticationService(AuthenticationPort):
    """Implements the authentication port over the user table."""

    def __init__(self, users: UserRepository, audit_logger: Logger, auth_config: AuthConfig):
        self._users = users
        self._log = audit_logger
        self._auth = auth_config

    def get_current_session(self, token: Optional[str]) -> Optional[UserSession]:
        user_id = subject_user_id(verify_jwt_token(token, self._auth)) if token else None
        if user_id is None:
            return None

        user = self._users.get_by_id(user_id)
        if user is None:
            logger.info(f"Session token refers to unknown user {user_id}")
            return None

        try:
            role = Role.from_string(user.role)
        except InvalidArgumentError:
            logger.warning(f"User {user_id} has unsupported role {user.role!r}")
            return None
        return UserSession(user_id=str(user.id), email=user.email, role=role)

    def require_authentication(self, token: Optional[str]) -> UserSession:
        session = self.get_current_session(token)
        if session is None:
            raise UnauthorizedError("User must be authenticated")
        return session

    def sign_in(self, email: str, password: str) -> UserSession:
        try:
            normalized = Email.create(email).value
        except InvalidArgumentError:
            self._log.warn("Sign-in rejected: malformed email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        user = self._users.get_by_email(normalized)
        if user is None:
            self._log.warn("Sign-in failed: unknown email", {"email": normalized})
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            self._log.audit("SIGNIN_FAILED", {"email": normalized}, str(user.id))
            raise UnauthorizedError(INVALID_CREDENTIALS)

        session = UserSession(
            user_id=str(user.id),
            email=user.email,
            role=Role.from_string(user.role),
        )
        self._users.update_last_login(session.user_id)
        self._log.audit("SIGNIN", {"email": session.email, "role": session.role.value}, session.user_id)
        return session

    def issue_token(self, session: UserSession) -> str:
        token = mint_jwt_token(session.user_id, self._auth)
        if not token:
            raise ConfigurationError("TL_JWT_SECRET is not configured; cannot issue session tokens")
        return token

    def sign_out(self, session: Optional[UserSession]) -> None:
        if session is None:
            return
        self._log.audit("SIGNOUT", {}, session.user_id)
