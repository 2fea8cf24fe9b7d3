"""
Application Services - Orchestration and cross-cutting concerns.

This module contains services that combine the pure domain rules with the
repositories and the audit logger: access control and the lending use cases.
"""

from services.application.authorization_service import AuthorizationService
from services.application.lending_service import LendingService

__all__ = [
    "AuthorizationService",
    "LendingService",
]
