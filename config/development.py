"""Development environment configuration."""

import logging
import os
from config.base import BaseConfig


class DevelopmentConfig(BaseConfig):
    """Configuration for development environment."""

    def _setup_environment(self):
        """Setup development-specific configuration."""
        self.debug = True

        # Mirror application log entries to the console while developing
        self.logging.echo_to_console = True

        # Allow local frontends
        if not self.auth.allowed_origins or self.auth.allowed_origins == ["*"]:
            self.auth.allowed_origins = [
                "http://localhost:3000",
                "http://localhost:8000",
                "http://127.0.0.1:3000",
                "http://127.0.0.1:8000",
            ]

        os.environ.setdefault("LOG_LEVEL", "DEBUG")

    def validate(self):
        """Development-specific validation (more permissive)."""
        errors = super().validate()

        # A missing JWT secret only disables sign-in during development
        warnings = [e for e in errors if "TL_JWT_SECRET" in e]
        errors = [e for e in errors if "TL_JWT_SECRET" not in e]

        if warnings:
            logger = logging.getLogger(__name__)
            for warning in warnings:
                logger.warning(f"Development config warning: {warning}")

        return errors
