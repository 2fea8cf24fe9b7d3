"""
Authorization Service - gates access to user-scoped resources.

Wraps the pure rules in ``services.domain.authorization_rules`` and records
every denial on the audit trail before raising the typed error.
"""

from __future__ import annotations
from typing import Optional

from domain.models.session import UserSession
from services.domain.authorization_rules import (
    AccessDecision,
    AccessOutcome,
    AccessRequest,
    evaluate,
    is_admin as _is_admin,
    owns_resource as _owns_resource,
)
from services.ports import Logger


class AuthorizationService:
    """Stateless access checks over an already-resolved session."""

    def __init__(self, audit_logger: Logger):
        self._log = audit_logger

    def require_authenticated(self, session: Optional[UserSession]) -> UserSession:
        self._enforce(session, AccessRequest.authenticated())
        return session

    def require_admin(self, session: Optional[UserSession]) -> UserSession:
        self._enforce(session, AccessRequest.admin())
        return session

    def require_ownership(self, session: Optional[UserSession], resource_owner_id: str) -> UserSession:
        self._enforce(session, AccessRequest.ownership(resource_owner_id))
        return session

    def require_access_to_resource(self, session: Optional[UserSession], resource_owner_id: str) -> UserSession:
        self._enforce(session, AccessRequest.resource_access(resource_owner_id))
        return session

    # Non-raising variants for conditional logic

    def is_admin(self, session: Optional[UserSession]) -> bool:
        return _is_admin(session)

    def owns_resource(self, session: Optional[UserSession], resource_owner_id: Optional[str]) -> bool:
        return _owns_resource(session, resource_owner_id)

    def _enforce(self, session: Optional[UserSession], request: AccessRequest) -> AccessDecision:
        decision = evaluate(session, request)
        if decision.allowed:
            return decision

        if decision.outcome is AccessOutcome.DENIED_UNAUTHORIZED:
            self._log.warn(
                "Authorization failed: no authenticated user",
                {"check": request.check.value, "resource_owner_id": request.resource_owner_id},
            )
        else:
            self._log.log_authz_failure(
                decision.user_id,
                request.check.name,
                decision.reason,
                target_user_id=request.resource_owner_id,
            )
        decision.raise_for_denial()
        return decision
