"""
Authorization tests.

Precedence checked:
1. Unauthenticated -> UnauthorizedError before any ownership check
2. Admin override on every check
3. Ownership for non-admins
4. Admin-only checks refuse non-admins even on their own resources
"""

import pytest

from domain.models.session import Role, UserSession
from services.application.authorization_service import AuthorizationService
from services.domain.authorization_rules import (
    AccessOutcome,
    AccessRequest,
    evaluate,
    is_admin,
    is_authenticated,
    owns_resource,
)
from shared.exceptions import ForbiddenError, UnauthorizedError
from tests.conftest import ALICE_ID, BOB_ID


# =============================================================================
# PURE RULES
# =============================================================================


class TestEvaluate:

    @pytest.mark.parametrize("request_", [
        AccessRequest.authenticated(),
        AccessRequest.ownership(ALICE_ID),
        AccessRequest.admin(),
        AccessRequest.resource_access(ALICE_ID),
    ])
    def test_missing_principal_is_unauthorized(self, request_):
        decision = evaluate(None, request_)
        assert decision.outcome is AccessOutcome.DENIED_UNAUTHORIZED

    def test_blank_user_id_is_unauthorized(self):
        ghost = UserSession(user_id="  ", email="ghost@example.com")
        decision = evaluate(ghost, AccessRequest.ownership("  "))
        assert decision.outcome is AccessOutcome.DENIED_UNAUTHORIZED

    def test_owner_allowed(self, alice):
        assert evaluate(alice, AccessRequest.ownership(ALICE_ID)).allowed
        assert evaluate(alice, AccessRequest.resource_access(ALICE_ID)).allowed

    def test_non_owner_forbidden(self, alice):
        decision = evaluate(alice, AccessRequest.resource_access(BOB_ID))
        assert decision.outcome is AccessOutcome.DENIED_FORBIDDEN
        assert decision.user_id == ALICE_ID
        assert decision.resource_owner_id == BOB_ID

    def test_admin_overrides_ownership(self, admin):
        assert evaluate(admin, AccessRequest.ownership(BOB_ID)).allowed
        assert evaluate(admin, AccessRequest.resource_access(BOB_ID)).allowed
        assert evaluate(admin, AccessRequest.admin()).allowed

    def test_admin_only_refuses_owner(self, alice):
        decision = evaluate(alice, AccessRequest.admin())
        assert decision.outcome is AccessOutcome.DENIED_FORBIDDEN

    def test_authenticated_check(self, bob):
        assert evaluate(bob, AccessRequest.authenticated()).allowed

    def test_raise_for_denial(self, alice):
        with pytest.raises(ForbiddenError):
            evaluate(alice, AccessRequest.admin()).raise_for_denial()
        with pytest.raises(UnauthorizedError):
            evaluate(None, AccessRequest.admin()).raise_for_denial()
        evaluate(alice, AccessRequest.authenticated()).raise_for_denial()


class TestPredicates:

    def test_never_raise(self, alice, admin):
        assert not is_authenticated(None)
        assert not is_admin(None)
        assert not owns_resource(None, ALICE_ID)
        assert not owns_resource(alice, None)
        assert owns_resource(alice, f" {ALICE_ID} ")
        assert is_admin(admin)
        assert not is_admin(alice)

    def test_owns_resource_is_identity_only(self, admin):
        # Admin override applies to gating, not to the ownership predicate
        assert not owns_resource(admin, ALICE_ID)


# =============================================================================
# SERVICE
# =============================================================================


class TestAuthorizationService:

    @pytest.fixture
    def service(self, recording_logger):
        return AuthorizationService(recording_logger)

    def test_unauthenticated_is_logged_without_audit(self, service, recording_logger):
        with pytest.raises(UnauthorizedError):
            service.require_access_to_resource(None, ALICE_ID)
        assert recording_logger.audits == []
        assert recording_logger.entries[-1]["level"] == "warn"

    def test_forbidden_is_audited(self, service, recording_logger, alice):
        with pytest.raises(ForbiddenError) as exc_info:
            service.require_access_to_resource(alice, BOB_ID)
        assert exc_info.value.resource_owner_id == BOB_ID
        audit = recording_logger.audits[-1]
        assert audit["action"] == "AUTHZ_FAILURE_RESOURCE_ACCESS"
        assert audit["user_id"] == ALICE_ID
        assert audit["context"]["target_user_id"] == BOB_ID

    def test_require_admin(self, service, alice, admin):
        assert service.require_admin(admin) is admin
        with pytest.raises(ForbiddenError):
            service.require_admin(alice)

    def test_require_ownership_admin_override(self, service, admin):
        assert service.require_ownership(admin, BOB_ID) is admin

    def test_require_authenticated_returns_session(self, service, bob):
        assert service.require_authenticated(bob) is bob

    def test_allowed_checks_are_silent(self, service, recording_logger, alice):
        service.require_ownership(alice, ALICE_ID)
        assert recording_logger.entries == []
        assert recording_logger.audits == []

    def test_non_raising_variants(self, service, alice):
        assert service.owns_resource(alice, ALICE_ID)
        assert not service.owns_resource(alice, BOB_ID)
        assert not service.is_admin(alice)
        assert service.is_admin(UserSession(user_id="root", email="root@example.com", role=Role.ADMIN))
