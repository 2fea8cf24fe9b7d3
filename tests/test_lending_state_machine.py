"""
Lending state machine tests.
"""

import pytest

from domain.models.lending import AcceptanceStatus, LendingRecord
from services.domain import lending_state_machine as rules
from shared.exceptions import InvalidArgumentError, InvalidStateTransitionError


def make_record(status=AcceptanceStatus.ACCEPTED, token_count=3, total=5, borrower="user-bob", version=1):
    return LendingRecord(
        id=1,
        lender_user_id="user-alice",
        person_name="Bob",
        token_count=token_count,
        total_tokens_lent=total,
        acceptance_status=status,
        lend_to_user_id=borrower,
        version=version,
    )


# =============================================================================
# TRANSITIONS
# =============================================================================


class TestTransitions:

    @pytest.mark.parametrize("from_status,to_status,allowed", [
        (AcceptanceStatus.PENDING, AcceptanceStatus.ACCEPTED, True),
        (AcceptanceStatus.PENDING, AcceptanceStatus.DECLINED, True),
        (AcceptanceStatus.ACCEPTED, AcceptanceStatus.ACCEPTED, True),
        (AcceptanceStatus.ACCEPTED, AcceptanceStatus.DECLINED, False),
        (AcceptanceStatus.ACCEPTED, AcceptanceStatus.PENDING, False),
        (AcceptanceStatus.DECLINED, AcceptanceStatus.ACCEPTED, False),
        (AcceptanceStatus.DECLINED, AcceptanceStatus.PENDING, False),
    ])
    def test_transition_table(self, from_status, to_status, allowed):
        assert rules.can_transition(from_status, to_status) is allowed

    def test_declined_is_terminal_with_reason(self):
        transition = rules.get_transition(AcceptanceStatus.DECLINED, AcceptanceStatus.ACCEPTED)
        assert not transition.allowed
        assert "Declined" in transition.reason
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            transition.raise_if_denied()
        assert exc_info.value.from_status == "declined"

    def test_can_respond_only_when_pending(self):
        assert rules.can_respond(make_record(AcceptanceStatus.PENDING)).allowed
        assert not rules.can_respond(make_record(AcceptanceStatus.ACCEPTED)).allowed
        assert not rules.can_respond(make_record(AcceptanceStatus.DECLINED)).allowed


# =============================================================================
# UPDATE RULES
# =============================================================================


class TestUpdateRules:

    @pytest.mark.parametrize("count", [1, -2, "5", 100])
    def test_valid_token_counts(self, count):
        assert rules.validate_token_count(count).allowed

    @pytest.mark.parametrize("count", [0, "0", 1.5, "abc", None])
    def test_invalid_token_counts(self, count):
        check = rules.validate_token_count(count)
        assert not check.allowed
        with pytest.raises(InvalidArgumentError):
            check.raise_if_denied(InvalidArgumentError)

    def test_can_update_only_accepted(self):
        assert rules.can_update(make_record(AcceptanceStatus.ACCEPTED)).allowed
        assert "pending" in rules.can_update(make_record(AcceptanceStatus.PENDING)).reason
        assert "declined" in rules.can_update(make_record(AcceptanceStatus.DECLINED)).reason

    @pytest.mark.parametrize("total,old,new,expected", [
        (5, 3, 6, 8),   # more lent: total grows by the delta
        (5, 3, 1, 5),   # repayment: total unchanged
        (5, 3, 3, 5),
        (0, 0, 2, 2),
        (4, 2, -1, 4),
    ])
    def test_calculate_new_total(self, total, old, new, expected):
        assert rules.calculate_new_total(total, old, new) == expected

    def test_new_total_never_below_new_balance(self):
        for new in range(-5, 12):
            total = rules.calculate_new_total(5, 3, new)
            assert total >= 5
            assert new <= total


# =============================================================================
# ACTOR AND CONCURRENCY RULES
# =============================================================================


class TestActorRules:

    def test_ownership(self):
        record = make_record()
        assert rules.validate_ownership(record, "user-alice").allowed
        assert not rules.validate_ownership(record, "user-bob").allowed

    def test_borrower_action(self):
        record = make_record(AcceptanceStatus.PENDING)
        assert rules.validate_borrower_action(record, "user-bob").allowed
        assert not rules.validate_borrower_action(record, "user-alice").allowed

    def test_unlinked_borrower_cannot_respond(self):
        record = make_record(AcceptanceStatus.PENDING, borrower=None)
        check = rules.validate_borrower_action(record, "user-bob")
        assert not check.allowed
        assert "legacy" in check.reason

    def test_version(self):
        assert rules.validate_version(3, 3).allowed
        assert not rules.validate_version(4, 3).allowed

    def test_balance_invariant(self):
        assert rules.validate_balance_invariant(5, 5).allowed
        assert rules.validate_balance_invariant(-1, 0).allowed
        assert not rules.validate_balance_invariant(6, 5).allowed


class TestLendingRecordModel:

    def test_note_and_label(self):
        assert make_record(AcceptanceStatus.PENDING).note == "Ausstehend - 5 gesamt"
        assert make_record(AcceptanceStatus.ACCEPTED).note == "Bestätigt - 5 gesamt"

    def test_display_name_prefers_registered_borrower(self):
        record = LendingRecord(
            id=9, lender_user_id="u1", person_name="Bobby", token_count=1,
            total_tokens_lent=1, acceptance_status=AcceptanceStatus.ACCEPTED,
            lend_to_user_id="u2", borrower_name="Bob Builder",
        )
        assert record.display_name == "Bob Builder"
        assert make_record().display_name == "Bob"

    def test_negative_total_rejected(self):
        with pytest.raises(InvalidArgumentError):
            make_record(total=-1)

    def test_status_from_string(self):
        assert AcceptanceStatus.from_string(" Accepted ") is AcceptanceStatus.ACCEPTED
        with pytest.raises(InvalidArgumentError):
            AcceptanceStatus.from_string("settled")
