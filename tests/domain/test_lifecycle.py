"""Tests for loan lifecycle transitions and derived status."""

from __future__ import annotations

from lendctl.domain.lifecycle import (
    LOAN_TRANSITIONS,
    LoanStatus,
    compute_loan_status,
    is_valid_transition,
    stored_status,
)
from lendctl.domain.loans import Loan


def _loan(*, extended: bool = False) -> Loan:
    return Loan(
        loan_id=0,
        start_time=0,
        duration=10,
        access_key=b"k",
        extended=extended,
        amount_paid=1,
    )


class TestTransitions:
    def test_absent_to_active(self) -> None:
        assert is_valid_transition("absent", "active")

    def test_active_to_extended(self) -> None:
        assert is_valid_transition("active", "extended")

    def test_extended_cannot_extend_again(self) -> None:
        assert not is_valid_transition("extended", "extended")

    def test_both_stored_states_end(self) -> None:
        assert is_valid_transition("active", "absent")
        assert is_valid_transition("extended", "absent")

    def test_absent_cannot_extend(self) -> None:
        assert not is_valid_transition("absent", "extended")

    def test_unknown_state(self) -> None:
        assert not is_valid_transition("expired", "absent")

    def test_expired_is_not_stored(self) -> None:
        assert "expired" not in LOAN_TRANSITIONS

    def test_custom_table(self) -> None:
        assert is_valid_transition("a", "b", {"a": ["b"]})


class TestStatus:
    def test_stored_status(self) -> None:
        assert stored_status(None) == LoanStatus.ABSENT
        assert stored_status(_loan()) == LoanStatus.ACTIVE
        assert stored_status(_loan(extended=True)) == LoanStatus.EXTENDED

    def test_compute_status_within_window(self) -> None:
        assert compute_loan_status(_loan(), 10) == "active"
        assert compute_loan_status(_loan(extended=True), 10) == "extended"

    def test_expiry_takes_precedence(self) -> None:
        assert compute_loan_status(_loan(), 11) == "expired"
        assert compute_loan_status(_loan(extended=True), 11) == "expired"

    def test_absent(self) -> None:
        assert compute_loan_status(None, 50) == "absent"
