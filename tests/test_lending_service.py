"""
Lending service tests: authorization ordering, state rules, audit trail.
"""

from unittest.mock import MagicMock

import pytest

from domain.models.lending import AcceptanceStatus
from repositories.lending_repository import LendingRepository
from services.application.authorization_service import AuthorizationService
from services.application.lending_service import LendingService
from shared.exceptions import (
    ConcurrentModificationError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateTransitionError,
    UnauthorizedError,
)
from tests.conftest import ALICE_ID, BOB_ID


@pytest.fixture
def service(seeded, recording_logger):
    return LendingService(
        LendingRepository(seeded),
        AuthorizationService(recording_logger),
        recording_logger,
    )


# =============================================================================
# LIST
# =============================================================================


class TestListRecords:

    def test_own_records(self, service, alice):
        assert [r.id for r in service.list_records(alice)] == [1, 2, 4]

    def test_other_users_records_forbidden(self, service, alice, recording_logger):
        with pytest.raises(ForbiddenError):
            service.list_records(alice, BOB_ID)
        assert recording_logger.actions() == ["AUTHZ_FAILURE_RESOURCE_ACCESS"]

    def test_admin_reads_any_user(self, service, admin):
        assert [r.id for r in service.list_records(admin, BOB_ID)] == [3]

    def test_unauthenticated(self, service):
        with pytest.raises(UnauthorizedError):
            service.list_records(None, ALICE_ID)

    def test_authorization_precedes_read(self, alice, recording_logger):
        repository = MagicMock(spec=LendingRepository)
        service = LendingService(repository, AuthorizationService(recording_logger), recording_logger)

        with pytest.raises(ForbiddenError):
            service.list_records(alice, BOB_ID)
        with pytest.raises(UnauthorizedError):
            service.list_records(None)
        repository.list_lending_records.assert_not_called()


# =============================================================================
# ACCEPT / DECLINE
# =============================================================================


class TestRespond:

    def test_borrower_accepts(self, service, bob, recording_logger):
        record = service.accept(bob, 1, expected_version=1)
        assert record.acceptance_status is AcceptanceStatus.ACCEPTED
        assert record.version == 2

        audit = recording_logger.audits[-1]
        assert audit["action"] == "LENDING_ACCEPT"
        assert audit["user_id"] == BOB_ID
        assert audit["context"]["lending_id"] == 1
        assert audit["context"]["from_status"] == "pending"

    def test_borrower_declines(self, service, bob, recording_logger):
        record = service.decline(bob, 1, expected_version=1)
        assert record.acceptance_status is AcceptanceStatus.DECLINED
        assert recording_logger.actions()[-1] == "LENDING_DECLINE"

    def test_lender_cannot_accept_own_offer(self, service, alice, recording_logger):
        with pytest.raises(ForbiddenError):
            service.accept(alice, 1, expected_version=1)
        assert recording_logger.actions() == ["AUTHZ_FAILURE_LENDING_ACCEPTED"]

    def test_already_answered(self, service, bob):
        service.accept(bob, 1, expected_version=1)
        with pytest.raises(InvalidStateTransitionError):
            service.decline(bob, 1, expected_version=2)

    def test_declined_is_terminal(self, service, bob):
        with pytest.raises(InvalidStateTransitionError):
            service.accept(bob, 4, expected_version=1)

    def test_stale_version(self, service, bob):
        with pytest.raises(ConcurrentModificationError):
            service.accept(bob, 1, expected_version=7)

    def test_unauthenticated(self, service):
        with pytest.raises(UnauthorizedError):
            service.accept(None, 1, expected_version=1)


# =============================================================================
# UPDATE TOKEN COUNT
# =============================================================================


class TestUpdateTokenCount:

    def test_increase_grows_total(self, service, alice, recording_logger):
        record = service.update_token_count(alice, 2, 5, expected_version=1)
        assert (record.token_count, record.total_tokens_lent) == (5, 7)

        audit = recording_logger.audits[-1]
        assert audit["action"] == "LENDING_UPDATE"
        assert audit["context"]["old_token_count"] == 2
        assert audit["context"]["new_token_count"] == 5

    def test_repayment_keeps_total(self, service, alice):
        record = service.update_token_count(alice, 2, 1, expected_version=1)
        assert (record.token_count, record.total_tokens_lent) == (1, 4)

    def test_zero_rejected(self, service, alice):
        with pytest.raises(InvalidArgumentError):
            service.update_token_count(alice, 2, 0, expected_version=1)

    def test_pending_cannot_be_updated(self, service, alice):
        with pytest.raises(InvalidStateTransitionError):
            service.update_token_count(alice, 1, 4, expected_version=1)

    def test_non_owner_forbidden(self, service, bob, recording_logger):
        with pytest.raises(ForbiddenError):
            service.update_token_count(bob, 2, 4, expected_version=1)
        assert recording_logger.actions() == ["AUTHZ_FAILURE_OWNERSHIP"]

    def test_admin_may_update(self, service, admin):
        record = service.update_token_count(admin, 3, 2, expected_version=1)
        assert (record.token_count, record.total_tokens_lent) == (2, 2)

    def test_stale_version(self, service, alice):
        service.update_token_count(alice, 2, 3, expected_version=1)
        with pytest.raises(ConcurrentModificationError):
            service.update_token_count(alice, 2, 4, expected_version=1)
