"""
Lending Service - authorized read and write paths for lending records.

Every write follows the same sequence:

    authenticate -> read record -> authorize -> state machine rules
    -> versioned write -> audit

so a request is never allowed to touch storage before its principal has
been checked.
"""

from __future__ import annotations
from typing import List, Optional

from domain.models.lending import AcceptanceStatus, LendingRecord
from domain.models.session import UserSession
from domain.value_objects.token_count import TokenCount
from repositories.lending_repository import LendingRepository
from services.application.authorization_service import AuthorizationService
from services.domain import lending_state_machine as rules
from services.ports import Logger
from shared.exceptions import (
    ConcurrentModificationError,
    ForbiddenError,
    InvalidArgumentError,
)


class LendingService:
    """Use cases over a user's lending ledger."""

    def __init__(
        self,
        repository: LendingRepository,
        authorization: AuthorizationService,
        audit_logger: Logger,
    ):
        self._repository = repository
        self._authz = authorization
        self._log = audit_logger

    def list_records(self, session: Optional[UserSession], owner_id: Optional[str] = None) -> List[LendingRecord]:
        """Records owned by owner_id (defaults to the acting user)."""
        self._authz.require_authenticated(session)
        owner = owner_id or session.user_id
        self._authz.require_access_to_resource(session, owner)

        records = self._repository.list_lending_records(owner)
        self._log.debug(
            "Listed lending records",
            {"owner_id": owner, "count": len(records)},
            user_id=session.user_id,
        )
        return records

    def accept(self, session: Optional[UserSession], record_id: int, expected_version: int) -> LendingRecord:
        return self._respond(session, record_id, expected_version, AcceptanceStatus.ACCEPTED)

    def decline(self, session: Optional[UserSession], record_id: int, expected_version: int) -> LendingRecord:
        return self._respond(session, record_id, expected_version, AcceptanceStatus.DECLINED)

    def update_token_count(
        self,
        session: Optional[UserSession],
        record_id: int,
        new_token_count: int,
        expected_version: int,
    ) -> LendingRecord:
        """Change the balance of an accepted record owned by the acting user."""
        self._authz.require_authenticated(session)
        record = self._repository.get_record(record_id)
        self._authz.require_ownership(session, record.lender_user_id)

        rules.validate_token_count(new_token_count).raise_if_denied(InvalidArgumentError)
        rules.can_update(record).raise_if_denied()
        rules.get_transition(record.acceptance_status, AcceptanceStatus.ACCEPTED).raise_if_denied()
        self._check_version(record, expected_version)

        new_total = rules.calculate_new_total(
            record.total_tokens_lent, record.token_count, new_token_count
        )
        updated = self._repository.update_token_count(
            record_id, TokenCount.create(new_token_count).value, new_total, expected_version
        )
        self._log.log_lending_operation(
            session.user_id,
            "update",
            record_id,
            {
                "old_token_count": record.token_count,
                "new_token_count": updated.token_count,
                "total_tokens_lent": updated.total_tokens_lent,
                "target_user_id": record.lend_to_user_id,
            },
        )
        return updated

    def _respond(
        self,
        session: Optional[UserSession],
        record_id: int,
        expected_version: int,
        status: AcceptanceStatus,
    ) -> LendingRecord:
        self._authz.require_authenticated(session)
        record = self._repository.get_record(record_id)

        check = rules.validate_borrower_action(record, session.user_id)
        if not check.allowed:
            self._log.log_authz_failure(
                session.user_id,
                f"LENDING_{status.name}",
                check.reason,
                target_user_id=record.lend_to_user_id,
            )
            raise ForbiddenError(
                check.reason,
                user_id=session.user_id,
                resource_owner_id=record.lend_to_user_id,
            )

        rules.can_respond(record).raise_if_denied()
        rules.get_transition(record.acceptance_status, status).raise_if_denied()
        self._check_version(record, expected_version)

        updated = self._repository.update_status(record_id, status, expected_version)
        operation = "accept" if status is AcceptanceStatus.ACCEPTED else "decline"
        self._log.log_lending_operation(
            session.user_id,
            operation,
            record_id,
            {
                "from_status": record.acceptance_status.value,
                "to_status": updated.acceptance_status.value,
                "target_user_id": record.lender_user_id,
            },
        )
        return updated

    @staticmethod
    def _check_version(record: LendingRecord, expected_version: int) -> None:
        if not rules.validate_version(record.version, expected_version).allowed:
            raise ConcurrentModificationError("LendingRecord", str(record.id), expected_version)
