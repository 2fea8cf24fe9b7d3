"""
Authorization Rules - pure access decisions over a resolved principal.

Rules are evaluated in a fixed precedence:

1. Authentication: no valid principal -> DENIED_UNAUTHORIZED
2. Admin override: admins pass every further check
3. Ownership: non-admins may only touch resources they own
4. Admin-only: non-admins are refused even on their own resources

The evaluator never performs I/O and never raises; callers turn a denied
decision into ``UnauthorizedError`` / ``ForbiddenError`` via ``raise_for_denial``.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from domain.models.session import Role, UserSession
from shared.exceptions import ForbiddenError, UnauthorizedError
from shared.validators import normalize_identifier


class AccessCheck(Enum):
    """Kinds of checks a caller can request."""
    AUTHENTICATED = "authenticated"
    OWNERSHIP = "ownership"
    ADMIN = "admin"
    RESOURCE_ACCESS = "resource_access"  # ownership OR admin


class AccessOutcome(Enum):
    ALLOWED = "allowed"
    DENIED_UNAUTHORIZED = "denied_unauthorized"
    DENIED_FORBIDDEN = "denied_forbidden"


@dataclass(frozen=True)
class AccessRequest:
    """Tagged request: which check, and against whose resource."""

    check: AccessCheck
    resource_owner_id: Optional[str] = None

    @classmethod
    def authenticated(cls) -> AccessRequest:
        return cls(AccessCheck.AUTHENTICATED)

    @classmethod
    def ownership(cls, resource_owner_id: str) -> AccessRequest:
        return cls(AccessCheck.OWNERSHIP, resource_owner_id)

    @classmethod
    def admin(cls) -> AccessRequest:
        return cls(AccessCheck.ADMIN)

    @classmethod
    def resource_access(cls, resource_owner_id: str) -> AccessRequest:
        return cls(AccessCheck.RESOURCE_ACCESS, resource_owner_id)


@dataclass(frozen=True)
class AccessDecision:
    """Tagged result of evaluating one request."""

    outcome: AccessOutcome
    reason: Optional[str] = None
    user_id: Optional[str] = None
    resource_owner_id: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is AccessOutcome.ALLOWED

    def raise_for_denial(self) -> None:
        """Raise the typed error matching a denied outcome; no-op when allowed."""
        if self.outcome is AccessOutcome.DENIED_UNAUTHORIZED:
            raise UnauthorizedError(self.reason or "User must be authenticated")
        if self.outcome is AccessOutcome.DENIED_FORBIDDEN:
            raise ForbiddenError(
                self.reason or "Forbidden - insufficient permissions",
                user_id=self.user_id,
                resource_owner_id=self.resource_owner_id,
            )


def is_authenticated(principal: Optional[UserSession]) -> bool:
    """A principal is valid when it carries a non-empty id and a known role."""
    if principal is None:
        return False
    return normalize_identifier(principal.user_id) is not None and isinstance(principal.role, Role)


def is_admin(principal: Optional[UserSession]) -> bool:
    return is_authenticated(principal) and principal.role is Role.ADMIN


def owns_resource(principal: Optional[UserSession], resource_owner_id: Optional[str]) -> bool:
    if not is_authenticated(principal):
        return False
    owner = normalize_identifier(resource_owner_id)
    return owner is not None and normalize_identifier(principal.user_id) == owner


_DENIAL_REASONS = {
    AccessCheck.OWNERSHIP: "User does not own this resource",
    AccessCheck.ADMIN: "Admin access required",
    AccessCheck.RESOURCE_ACCESS: "Access denied to this resource",
}


def evaluate(principal: Optional[UserSession], request: AccessRequest) -> AccessDecision:
    """Decide whether principal may perform the requested check."""
    if not is_authenticated(principal):
        return AccessDecision(
            AccessOutcome.DENIED_UNAUTHORIZED,
            reason="User must be authenticated",
            resource_owner_id=request.resource_owner_id,
        )

    user_id = principal.user_id
    allowed = AccessDecision(
        AccessOutcome.ALLOWED,
        user_id=user_id,
        resource_owner_id=request.resource_owner_id,
    )

    if request.check is AccessCheck.AUTHENTICATED or principal.role is Role.ADMIN:
        return allowed

    if request.check is AccessCheck.ADMIN:
        passed = False
    else:
        passed = owns_resource(principal, request.resource_owner_id)

    if passed:
        return allowed

    return AccessDecision(
        AccessOutcome.DENIED_FORBIDDEN,
        reason=_DENIAL_REASONS[request.check],
        user_id=user_id,
        resource_owner_id=request.resource_owner_id,
    )
