"""
Custom exceptions and error handling utilities.

This module centralizes all custom exceptions used throughout the application
and provides utilities for consistent error handling and reporting.
"""

from typing import Dict, Any, Optional


# =================== BASE EXCEPTIONS ===================

class TokenLedgerError(Exception):
    """Base exception for all Token Ledger application errors."""

    def __init__(
        self,
        message: str,
        code: str = None,
        details: Dict[str, Any] = None,
        original_exception: Exception = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.replace("Error", "").lower()
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error": self.message,
            "code": self.code,
            "type": self.__class__.__name__
        }

        if self.details:
            result["details"] = self.details

        if self.original_exception:
            result["original_error"] = str(self.original_exception)

        return result


# =================== INPUT VALIDATION EXCEPTIONS ===================

class InvalidArgumentError(TokenLedgerError):
    """Raised when a value object or calculation receives malformed input."""

    def __init__(self, message: str, value: Any = None, details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            code="invalid_argument",
            details={
                **({"value": str(value)} if value is not None else {}),
                **(details or {})
            }
        )
        self.value = value


# =================== AUTHORIZATION EXCEPTIONS ===================

class AuthorizationError(TokenLedgerError):
    """Base class for access control failures."""
    pass


class UnauthorizedError(AuthorizationError):
    """Raised when no valid acting identity is present."""

    def __init__(self, message: str = "Unauthorized access"):
        super().__init__(message=message, code="unauthorized")


class ForbiddenError(AuthorizationError):
    """Raised when a valid identity lacks privilege or ownership."""

    def __init__(
        self,
        message: str = "Forbidden - insufficient permissions",
        user_id: Optional[str] = None,
        resource_owner_id: Optional[str] = None
    ):
        super().__init__(
            message=message,
            code="forbidden",
            details={
                "user_id": user_id,
                "resource_owner_id": resource_owner_id
            } if user_id else None
        )
        self.user_id = user_id
        self.resource_owner_id = resource_owner_id


# =================== CONFIGURATION EXCEPTIONS ===================

class ConfigurationError(TokenLedgerError):
    """Raised when configuration is invalid or missing."""
    pass


# =================== REPOSITORY EXCEPTIONS ===================

class RepositoryError(TokenLedgerError):
    """Base class for repository errors."""
    pass


class PersistenceUnavailableError(RepositoryError):
    """Raised when the data store cannot be reached or a read fails."""

    def __init__(self, repository_name: str, original_exception: Exception = None):
        message = f"Cannot reach data store from {repository_name}"
        super().__init__(
            message=message,
            code="persistence_unavailable",
            details={"repository_name": repository_name},
            original_exception=original_exception
        )
        self.repository_name = repository_name


class EntityNotFoundError(RepositoryError):
    """Raised when requested entity is not found."""

    def __init__(self, entity_type: str, identifier: str, details: Dict[str, Any] = None):
        message = f"{entity_type} not found: {identifier}"
        super().__init__(
            message=message,
            code="entity_not_found",
            details={
                "entity_type": entity_type,
                "identifier": identifier,
                **(details or {})
            }
        )
        self.entity_type = entity_type
        self.identifier = identifier


class ConcurrentModificationError(RepositoryError):
    """Raised when an optimistic version check fails on write."""

    def __init__(self, entity_type: str, identifier: str, expected_version: int):
        super().__init__(
            message=f"{entity_type} {identifier} was modified by another user. Please refresh and try again.",
            code="concurrent_modification",
            details={
                "entity_type": entity_type,
                "identifier": identifier,
                "expected_version": expected_version
            }
        )
        self.expected_version = expected_version


# =================== BUSINESS LOGIC EXCEPTIONS ===================

class BusinessLogicError(TokenLedgerError):
    """Base class for business logic violations."""
    pass


class InvalidStateTransitionError(BusinessLogicError):
    """Raised when a lending record cannot move to the requested state."""

    def __init__(self, reason: str, from_status: str = None, to_status: str = None):
        super().__init__(
            message=reason,
            code="invalid_state_transition",
            details={"from": from_status, "to": to_status}
        )
        self.from_status = from_status
        self.to_status = to_status


# =================== ERROR HANDLING UTILITIES ===================

def create_error_response(
    exception: Exception,
    include_details: bool = True
) -> Dict[str, Any]:
    """
    Create standardized error response from exception.

    Args:
        exception: The exception to convert
        include_details: Whether to include detailed error information

    Returns:
        Standardized error response dictionary
    """
    if isinstance(exception, TokenLedgerError):
        response = {
            "success": False,
            "error": exception.message,
            "code": exception.code
        }

        if include_details and exception.details:
            response["details"] = exception.details

        return response
    else:
        return {
            "success": False,
            "error": str(exception),
            "code": "unexpected_error"
        }


# =================== EXPORT ALL EXCEPTIONS ===================

__all__ = [
    # Base exceptions
    "TokenLedgerError",

    # Input validation exceptions
    "InvalidArgumentError",

    # Authorization exceptions
    "AuthorizationError",
    "UnauthorizedError",
    "ForbiddenError",

    # Configuration exceptions
    "ConfigurationError",

    # Repository exceptions
    "RepositoryError",
    "PersistenceUnavailableError",
    "EntityNotFoundError",
    "ConcurrentModificationError",

    # Business logic exceptions
    "BusinessLogicError",
    "InvalidStateTransitionError",

    # Utility functions
    "create_error_response",
]
