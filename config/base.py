"""
Base configuration class with all application settings.

Token conversion constants live in shared/constants.py and are deliberately
not configurable here.
"""

import os
from dataclasses import dataclass, field
from typing import List

from shared.constants import (
    DEFAULT_JWT_ALGORITHM,
    DEFAULT_SESSION_TTL_MINUTES,
    LOG_RETENTION_DAYS,
    SESSION_COOKIE_NAME,
)


def _get_bool(name: str, default: bool) -> bool:
    """Parse boolean environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    v = val.strip().lower()
    return v in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    """Parse integer environment variable."""
    try:
        return int(os.getenv(name, str(default)))
    except (ValueError, TypeError):
        return default


def _get_list(name: str, default: List[str] = None, separator: str = ",") -> List[str]:
    """Parse comma-separated list environment variable."""
    if default is None:
        default = []

    val = os.getenv(name, "")
    if not val.strip():
        return default

    return [item.strip() for item in val.split(separator) if item.strip()]


@dataclass
class DatabaseConfig:
    """Database connection configuration."""
    url: str = ""
    pool_size: int = 20
    max_overflow: int = 40
    pool_timeout: int = 5
    pool_recycle: int = 1800

    @classmethod
    def from_env(cls) -> 'DatabaseConfig':
        return cls(
            url=os.getenv("DATABASE_URL", ""),
            pool_size=_get_int("DB_POOL_SIZE", 20),
            max_overflow=_get_int("DB_MAX_OVERFLOW", 40),
            pool_timeout=_get_int("DB_POOL_TIMEOUT", 5),
            pool_recycle=_get_int("DB_POOL_RECYCLE", 1800),
        )


@dataclass
class AuthConfig:
    """Authentication configuration."""
    jwt_secret: str = ""
    jwt_algorithm: str = DEFAULT_JWT_ALGORITHM
    session_ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES
    cookie_name: str = SESSION_COOKIE_NAME
    cookie_secure: bool = False
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> 'AuthConfig':
        return cls(
            jwt_secret=os.getenv("TL_JWT_SECRET", ""),
            jwt_algorithm=os.getenv("TL_JWT_ALG", DEFAULT_JWT_ALGORITHM),
            session_ttl_minutes=_get_int("TL_SESSION_TTL_MINUTES", DEFAULT_SESSION_TTL_MINUTES),
            cookie_name=os.getenv("TL_SESSION_COOKIE", SESSION_COOKIE_NAME),
            cookie_secure=_get_bool("TL_COOKIE_SECURE", False),
            allowed_origins=_get_list("TL_ALLOWED_ORIGINS", ["*"]),
        )


@dataclass
class LoggingConfig:
    """Application log and audit trail configuration."""
    level: str = "INFO"
    echo_to_console: bool = False
    retention_days: int = LOG_RETENTION_DAYS

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            echo_to_console=_get_bool("TL_LOG_ECHO", False),
            retention_days=_get_int("TL_LOG_RETENTION_DAYS", LOG_RETENTION_DAYS),
        )


class BaseConfig:
    """
    Base configuration class that consolidates all application settings.
    """

    def __init__(self):
        # Core app configuration
        self.app_name: str = "Token Ledger"
        self.app_version: str = "1.0.0"
        self.debug: bool = _get_bool("DEBUG", False)
        self.environment: str = os.getenv("TOKEN_LEDGER_ENV", "development")

        # Configuration groups
        self.database = DatabaseConfig.from_env()
        self.auth = AuthConfig.from_env()
        self.logging = LoggingConfig.from_env()

        # Initialize environment-specific settings
        self._setup_environment()

    def _setup_environment(self):
        """Setup environment-specific configuration. Override in subclasses."""
        pass

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() in ("development", "dev")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() in ("testing", "test")

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.auth.jwt_secret:
            errors.append("TL_JWT_SECRET is required to issue session tokens")

        if self.logging.retention_days < 1:
            errors.append("TL_LOG_RETENTION_DAYS must be at least 1")

        return errors
