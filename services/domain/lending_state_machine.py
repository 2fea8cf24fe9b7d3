"""
Lending State Machine - transition and invariant rules for lending records.

    pending --accept--> accepted --update--> accepted
       |
       +---decline----> declined (terminal)

Invariants:
1. Token count cannot be zero (delete the record instead)
2. Only accepted records can have their token count changed
3. Declined records cannot be modified
4. Cumulative total lent never decreases and never drops below the balance
5. Writes carry the version they were based on (optimistic locking)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Type

from domain.models.lending import AcceptanceStatus, LendingRecord
from domain.value_objects.token_count import TokenCount
from shared.exceptions import (
    TokenLedgerError,
    InvalidArgumentError,
    InvalidStateTransitionError,
)


@dataclass(frozen=True)
class RuleCheck:
    """Outcome of a single rule: allowed, or refused with a reason."""

    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> RuleCheck:
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> RuleCheck:
        return cls(False, reason)

    def raise_if_denied(self, error_type: Type[TokenLedgerError] = InvalidStateTransitionError) -> None:
        if not self.allowed:
            raise error_type(self.reason)


@dataclass(frozen=True)
class StateTransition:
    from_status: AcceptanceStatus
    to_status: AcceptanceStatus
    allowed: bool
    reason: Optional[str] = None

    def raise_if_denied(self) -> None:
        if not self.allowed:
            raise InvalidStateTransitionError(
                self.reason, self.from_status.value, self.to_status.value
            )


_TRANSITIONS: Dict[AcceptanceStatus, FrozenSet[AcceptanceStatus]] = {
    AcceptanceStatus.PENDING: frozenset({AcceptanceStatus.ACCEPTED, AcceptanceStatus.DECLINED}),
    AcceptanceStatus.ACCEPTED: frozenset({AcceptanceStatus.ACCEPTED}),
    AcceptanceStatus.DECLINED: frozenset(),
}


def can_transition(from_status: AcceptanceStatus, to_status: AcceptanceStatus) -> bool:
    return to_status in _TRANSITIONS.get(from_status, frozenset())


def get_transition(from_status: AcceptanceStatus, to_status: AcceptanceStatus) -> StateTransition:
    allowed = can_transition(from_status, to_status)
    reason = None
    if not allowed:
        if from_status is AcceptanceStatus.DECLINED:
            reason = "Declined lendings cannot be modified"
        else:
            reason = f"Transition from {from_status.value} to {to_status.value} is not allowed"
    return StateTransition(from_status, to_status, allowed, reason)


def validate_token_count(count) -> RuleCheck:
    try:
        tokens = TokenCount.create(count)
    except InvalidArgumentError as e:
        return RuleCheck.deny(e.message)
    if tokens.is_zero:
        return RuleCheck.deny("Token count cannot be zero. Use delete operation to remove lending.")
    return RuleCheck.ok()


def can_respond(record: LendingRecord) -> RuleCheck:
    """Accept and decline apply to pending requests only."""
    if record.acceptance_status is not AcceptanceStatus.PENDING:
        return RuleCheck.deny(
            f"Lending is already {record.acceptance_status.value} and cannot be answered again"
        )
    return RuleCheck.ok()


def can_update(record: LendingRecord) -> RuleCheck:
    if record.acceptance_status is AcceptanceStatus.PENDING:
        return RuleCheck.deny("Cannot update pending lending. Accept or decline it first.")
    if record.acceptance_status is AcceptanceStatus.DECLINED:
        return RuleCheck.deny("Cannot update declined lending.")
    return RuleCheck.ok()


def calculate_new_total(current_total: int, old_token_count: int, new_token_count: int) -> int:
    """
    Cumulative total after changing the balance from old to new.

    Only increases count as new lending; repayments lower the balance but
    leave the cumulative total untouched.
    """
    current = TokenCount.create(current_total)
    difference = TokenCount.create(new_token_count).subtract(TokenCount.create(old_token_count))
    if difference.is_positive:
        return current.add(difference).value
    return current.value


def validate_ownership(record: LendingRecord, user_id: str) -> RuleCheck:
    if record.lender_user_id != user_id:
        return RuleCheck.deny("You do not have permission to modify this lending")
    return RuleCheck.ok()


def validate_borrower_action(record: LendingRecord, current_user_id: str) -> RuleCheck:
    """Only the linked borrower may accept or decline."""
    if not record.lend_to_user_id:
        return RuleCheck.deny("Cannot accept/decline legacy lending without linked user")
    if record.lend_to_user_id != current_user_id:
        return RuleCheck.deny("Only the borrower can accept or decline this lending request")
    return RuleCheck.ok()


def validate_version(current_version: int, expected_version: int) -> RuleCheck:
    if current_version != expected_version:
        return RuleCheck.deny("Lending was modified by another user. Please refresh and try again.")
    return RuleCheck.ok()


def validate_balance_invariant(token_count: int, total_tokens_lent: int) -> RuleCheck:
    if token_count > total_tokens_lent:
        return RuleCheck.deny(
            f"Token balance {token_count} exceeds total tokens lent {total_tokens_lent}"
        )
    return RuleCheck.ok()


__all__ = [
    "RuleCheck",
    "StateTransition",
    "can_transition",
    "get_transition",
    "validate_token_count",
    "can_respond",
    "can_update",
    "calculate_new_total",
    "validate_ownership",
    "validate_borrower_action",
    "validate_version",
    "validate_balance_invariant",
]
