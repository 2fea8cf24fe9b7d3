"""Production environment configuration."""

import os
from config.base import BaseConfig


class ProductionConfig(BaseConfig):
    """Configuration for production environment."""

    def _setup_environment(self):
        """Setup production-specific configuration."""
        self.debug = False

        # Session cookies only over HTTPS
        self.auth.cookie_secure = True

        # Strict CORS in production
        allowed_origins = os.getenv("TL_ALLOWED_ORIGINS", "").strip()
        if allowed_origins:
            self.auth.allowed_origins = [
                origin.strip() for origin in allowed_origins.split(",")
                if origin.strip()
            ]
        else:
            self.auth.allowed_origins = []

        os.environ.setdefault("LOG_LEVEL", "INFO")

    def validate(self):
        """Production-specific validation (strict)."""
        errors = super().validate()

        if not self.database.url:
            errors.append("DATABASE_URL is required in production")

        if "*" in (self.auth.allowed_origins or []):
            errors.append("Wildcard CORS origins are not allowed in production")

        if not self.auth.cookie_secure:
            errors.append("Session cookies must be secure in production")

        return errors
