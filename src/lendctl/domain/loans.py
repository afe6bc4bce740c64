"""Loan, history entry, and registry parameter models.

All models are frozen. A loan is "mutated" by replacing it with a
``model_copy(update=...)`` in the registry map, which keeps the
aggregate's snapshot/restore cheap.

Expiry is never stored. It is derived from ``start_time + duration``
against the height supplied by the caller, on every read.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

DEFAULT_MAX_LOAN_DURATION = 43200
DEFAULT_EXTENSION_FEE = 1000

# Ledger columns are signed 64-bit integers.
LEDGER_INT_MAX = 2**63 - 1
LEDGER_INT_MIN = -(2**63)


class LoanAction(StrEnum):
    """Canonical action tags recorded in the loan history."""

    START_LOAN = "start-loan"
    ACCESS_DENIED = "access-denied"
    END_LOAN = "end-loan"
    EXTEND_LOAN = "extend-loan"


class Loan(BaseModel):
    """A time-boxed access grant for one (resource, borrower) pair.

    Attributes:
        loan_id: Counter value allocated when the loan started.
        start_time: Height at which the loan began. Immutable.
        duration: Window length in heights. Grows only by extension.
        access_key: Opaque payload handed to the borrower. Immutable.
        extended: Set once by the first successful extension.
        amount_paid: Cumulative payments attributed to this loan.
    """

    model_config = {"frozen": True}

    loan_id: int
    start_time: int
    duration: int
    access_key: bytes
    extended: bool = False
    amount_paid: int

    @property
    def expires_at(self) -> int:
        """Last height at which access is still granted."""
        return self.start_time + self.duration

    def is_expired(self, height: int) -> bool:
        """True once *height* is strictly past the loan window."""
        return height > self.expires_at

    def has_elapsed(self, height: int) -> bool:
        """True once *height* has reached the end of the loan window."""
        return height >= self.expires_at


class LoanHistoryEntry(BaseModel):
    """One audit record for a loan key."""

    model_config = {"frozen": True}

    timestamp: int
    action: LoanAction
    success: bool


class RegistryParameters(BaseModel):
    """Process-wide registry configuration.

    ``issuer`` is fixed when the ledger is created. The remaining values
    are amended by the authority through the configuration operations.
    """

    model_config = {"frozen": True}

    issuer: str
    max_loan_duration: int = Field(default=DEFAULT_MAX_LOAN_DURATION, gt=0, le=LEDGER_INT_MAX)
    extension_fee: int = Field(default=DEFAULT_EXTENSION_FEE, ge=0, le=LEDGER_INT_MAX)
    authority_contract: str | None = None
    loan_counter: int = Field(default=0, ge=0)

    @property
    def has_authority(self) -> bool:
        return self.authority_contract is not None


def is_valid_duration(duration: int, max_loan_duration: int) -> bool:
    """Check ``0 < duration <= max_loan_duration``."""
    return 0 < duration <= max_loan_duration


def fits_ledger(*values: int) -> bool:
    """Check every value can be stored in a ledger integer column."""
    return all(LEDGER_INT_MIN <= value <= LEDGER_INT_MAX for value in values)
