"""
Token lending domain model.

One ledger entry tracking tokens a user has lent to a named person,
with its acceptance status and an optimistic-locking version.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from shared.constants import (
    LENDING_STATUS_PENDING,
    LENDING_STATUS_ACCEPTED,
    LENDING_STATUS_DECLINED,
    LENDING_STATUS_LABELS,
)
from shared.exceptions import InvalidArgumentError


class AcceptanceStatus(Enum):
    """Settlement state of a lending record."""
    PENDING = LENDING_STATUS_PENDING
    ACCEPTED = LENDING_STATUS_ACCEPTED
    DECLINED = LENDING_STATUS_DECLINED

    @classmethod
    def from_string(cls, status: str) -> AcceptanceStatus:
        try:
            return cls(str(status).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Unknown acceptance status: {status}", value=status)

    @property
    def label(self) -> str:
        return LENDING_STATUS_LABELS[self.value]


@dataclass(frozen=True)
class LendingRecord:
    """
    Immutable view of one lending relationship.

    ``lender_user_id`` owns the record for authorization purposes.
    ``lend_to_user_id`` and ``borrower_name`` are set when the borrower is a
    registered user; otherwise only ``person_name`` is known.
    """

    id: int
    lender_user_id: str
    person_name: str
    token_count: int
    total_tokens_lent: int
    acceptance_status: AcceptanceStatus
    lend_to_user_id: Optional[str] = None
    borrower_name: Optional[str] = None
    version: int = 1

    def __post_init__(self):
        if not self.lender_user_id:
            raise InvalidArgumentError("Lending record requires an owning user")
        if self.total_tokens_lent < 0:
            raise InvalidArgumentError(
                f"Total tokens lent cannot be negative: {self.total_tokens_lent}",
                value=self.total_tokens_lent
            )

    @property
    def display_name(self) -> str:
        """Registered borrower name when linked, else the free-text name."""
        return self.borrower_name or self.person_name

    @property
    def status_label(self) -> str:
        return self.acceptance_status.label

    @property
    def note(self) -> str:
        return f"{self.status_label} - {self.total_tokens_lent} gesamt"

    @property
    def balance_within_total(self) -> bool:
        """Current balance never exceeds the cumulative amount lent."""
        return self.token_count <= self.total_tokens_lent

    def to_summary(self) -> Dict[str, Any]:
        """Shape rendered by the lending overview."""
        return {
            "id": self.id,
            "name": self.display_name,
            "balance": self.token_count,
            "status": self.acceptance_status.value,
            "note": self.note,
            "version": self.version,
        }
