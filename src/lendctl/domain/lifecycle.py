"""Loan lifecycle — stored states, transitions, and derived status.

A loan moves ``absent -> active -> extended -> absent``; the
``active -> extended`` step is optional and one-way. ``expired`` is not
a stored state: it is computed from the height on every read, so an
expired loan stays in the registry until it is explicitly ended.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lendctl.domain.loans import Loan


class LoanStatus(StrEnum):
    """Status of a loan key as seen by a reader."""

    ABSENT = "absent"
    ACTIVE = "active"
    EXTENDED = "extended"
    EXPIRED = "expired"


LOAN_TRANSITIONS: dict[str, list[str]] = {
    "absent": ["active"],
    "active": ["extended", "absent"],
    "extended": ["absent"],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = LOAN_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


def stored_status(loan: Loan | None) -> str:
    """Stored lifecycle state of *loan*, ignoring expiry."""
    if loan is None:
        return str(LoanStatus.ABSENT)
    if loan.extended:
        return str(LoanStatus.EXTENDED)
    return str(LoanStatus.ACTIVE)


def compute_loan_status(loan: Loan | None, height: int) -> str:
    """Status of *loan* at *height*, with expiry taking precedence."""
    if loan is not None and loan.is_expired(height):
        return str(LoanStatus.EXPIRED)
    return stored_status(loan)
