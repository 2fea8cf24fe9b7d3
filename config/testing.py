"""Testing environment configuration."""

from config.base import BaseConfig, AuthConfig, DatabaseConfig


class TestingConfig(BaseConfig):
    """Configuration for testing environment."""

    def _setup_environment(self):
        """Setup testing-specific configuration."""
        self.debug = True

        self.database = DatabaseConfig(url="sqlite://")

        self.auth = AuthConfig(
            jwt_secret=self.auth.jwt_secret or "test-secret-not-for-production-0123456789",
            jwt_algorithm=self.auth.jwt_algorithm,
            session_ttl_minutes=5,  # Short sessions for tests
            cookie_name=self.auth.cookie_name,
            cookie_secure=False,
            allowed_origins=["*"],
        )

        self.logging.echo_to_console = False

    def validate(self):
        """Testing-specific validation (very permissive)."""
        errors = []

        if not self.auth.jwt_secret:
            errors.append("Test JWT secret is required")

        return errors
