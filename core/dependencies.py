"""
Composition point: FastAPI dependency providers.

Settings and the audit logger are built once per process; repositories and
services are cheap and assembled per request from them. Tests replace
``get_session_factory`` and ``get_audit_logger`` through
``app.dependency_overrides``.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request  # type: ignore

from config import BaseConfig, get_config
from core.db import SessionFactory, get_db_session
from domain.models.session import UserSession
from repositories.lending_repository import LendingRepository
from repositories.user_repository import UserRepository
from services.application.authorization_service import AuthorizationService
from services.application.lending_service import LendingService
from services.infrastructure.authentication_service import AuthenticationService
from services.infrastructure.database_logger import DatabaseLogger
from services.ports import Logger


@lru_cache(maxsize=1)
def get_settings() -> BaseConfig:
    return get_config()


@lru_cache(maxsize=1)
def get_audit_logger() -> Logger:
    return DatabaseLogger(get_db_session, echo_to_console=get_settings().logging.echo_to_console)


def get_session_factory() -> SessionFactory:
    return get_db_session


def get_user_repository(factory: SessionFactory = Depends(get_session_factory)) -> UserRepository:
    return UserRepository(factory)


def get_lending_repository(factory: SessionFactory = Depends(get_session_factory)) -> LendingRepository:
    return LendingRepository(factory)


def get_authorization_service(log: Logger = Depends(get_audit_logger)) -> AuthorizationService:
    return AuthorizationService(log)


def get_authentication_service(
    users: UserRepository = Depends(get_user_repository),
    log: Logger = Depends(get_audit_logger),
    settings: BaseConfig = Depends(get_settings),
) -> AuthenticationService:
    return AuthenticationService(users, log, settings.auth)


def get_lending_service(
    repository: LendingRepository = Depends(get_lending_repository),
    authorization: AuthorizationService = Depends(get_authorization_service),
    log: Logger = Depends(get_audit_logger),
) -> LendingService:
    return LendingService(repository, authorization, log)


def get_session_token(request: Request, settings: BaseConfig = Depends(get_settings)) -> Optional[str]:
    """Session token from the auth cookie, or from a Bearer header."""
    token = request.cookies.get(settings.auth.cookie_name)
    if token:
        return token
    header = request.headers.get("authorization") or ""
    if header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip() or None
    return None


def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthenticationService = Depends(get_authentication_service),
) -> Optional[UserSession]:
    return auth.get_current_session(token)
