"""
Lending Repository for token lending records.

Reads are always scoped to one owning user and re-verified row by row.
Writes are versioned: an UPDATE only applies when the stored version still
matches the version the caller read.
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from sqlalchemy import update  # type: ignore
from sqlalchemy.orm import Session, aliased  # type: ignore

from core.db import SessionFactory
from core.models import TokenLending, User
from domain.models.lending import AcceptanceStatus, LendingRecord
from repositories.base_repository import BaseRepository
from services.domain.lending_state_machine import validate_balance_invariant
from shared.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    InvalidArgumentError,
)
import logging

logger = logging.getLogger(__name__)

_ENTITY = "LendingRecord"


def _to_record(row: TokenLending, borrower_name: Optional[str]) -> LendingRecord:
    return LendingRecord(
        id=row.id,
        lender_user_id=row.user_id,
        person_name=row.person_name,
        token_count=row.token_count,
        total_tokens_lent=row.total_tokens_lent,
        acceptance_status=AcceptanceStatus.from_string(row.acceptance_status),
        lend_to_user_id=row.lend_to_user_id,
        borrower_name=borrower_name,
        version=row.version,
    )


class LendingRepository(BaseRepository[TokenLending]):
    """Repository for TokenLending operations."""

    def __init__(self, session_factory: Optional[SessionFactory] = None):
        super().__init__(TokenLending, session_factory)

    @staticmethod
    def _select(session: Session):
        borrower = aliased(User)
        return (
            session.query(TokenLending, borrower.name)
            .outerjoin(borrower, TokenLending.lend_to_user_id == borrower.id)
        )

    def list_lending_records(self, user_id: str) -> List[LendingRecord]:
        """All lending records owned by user_id, in one round trip."""
        def query_func(session: Session) -> List[LendingRecord]:
            rows = (
                self._select(session)
                .filter(TokenLending.user_id == user_id)
                .order_by(TokenLending.id)
                .all()
            )
            records = []
            for row, borrower_name in rows:
                if row.user_id != user_id:
                    logger.error(
                        f"Dropping lending {row.id} owned by {row.user_id} from result for {user_id}"
                    )
                    continue
                record = _to_record(row, borrower_name)
                if not record.balance_within_total:
                    logger.warning(
                        f"Lending {record.id} balance {record.token_count} exceeds "
                        f"total lent {record.total_tokens_lent}"
                    )
                records.append(record)
            return records

        return self.execute_query(query_func)

    def get_record(self, record_id: int) -> LendingRecord:
        def query_func(session: Session) -> LendingRecord:
            return self._load(session, record_id)

        return self.execute_query(query_func)

    def update_status(
        self,
        record_id: int,
        status: AcceptanceStatus,
        expected_version: int,
    ) -> LendingRecord:
        """Set the acceptance status if the record is still at expected_version."""
        return self._versioned_update(
            record_id,
            expected_version,
            acceptance_status=status.value,
        )

    def update_token_count(
        self,
        record_id: int,
        token_count: int,
        total_tokens_lent: int,
        expected_version: int,
    ) -> LendingRecord:
        """Set balance and cumulative total; the balance may never exceed the total."""
        validate_balance_invariant(token_count, total_tokens_lent).raise_if_denied(InvalidArgumentError)
        return self._versioned_update(
            record_id,
            expected_version,
            token_count=token_count,
            total_tokens_lent=total_tokens_lent,
        )

    def _versioned_update(self, record_id: int, expected_version: int, **values) -> LendingRecord:
        def query_func(session: Session) -> LendingRecord:
            result = session.execute(
                update(TokenLending)
                .where(TokenLending.id == record_id)
                .where(TokenLending.version == expected_version)
                .values(
                    version=TokenLending.version + 1,
                    updated_at_utc=datetime.utcnow(),
                    **values,
                )
            )
            if result.rowcount == 0:
                session.rollback()
                raise ConcurrentModificationError(_ENTITY, str(record_id), expected_version)
            session.commit()
            return self._load(session, record_id)

        return self.execute_query(query_func)

    def _load(self, session: Session, record_id: int) -> LendingRecord:
        row = self._select(session).filter(TokenLending.id == record_id).first()
        if row is None:
            raise EntityNotFoundError(_ENTITY, str(record_id))
        lending, borrower_name = row
        return _to_record(lending, borrower_name)
