"""Shared service-layer helpers: payload builders for loans and history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lendctl.domain.lifecycle import compute_loan_status

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lendctl.domain.keys import LoanKey
    from lendctl.domain.loans import Loan, LoanHistoryEntry


def loan_payload(key: LoanKey, loan: Loan, height: int) -> dict[str, Any]:
    """Flatten *loan* into a result payload as seen at *height*.

    The access key is hex-encoded so payloads stay JSON-safe.
    """
    return {
        "loan_id": loan.loan_id,
        "resource_id": key.resource_id,
        "borrower": key.borrower,
        "start_time": loan.start_time,
        "duration": loan.duration,
        "expires_at": loan.expires_at,
        "access_key": loan.access_key.hex(),
        "extended": loan.extended,
        "amount_paid": loan.amount_paid,
        "status": compute_loan_status(loan, height),
    }


def history_payload(entries: Iterable[LoanHistoryEntry]) -> list[dict[str, Any]]:
    """Serialize history entries, preserving newest-first order."""
    return [
        {"timestamp": e.timestamp, "action": str(e.action), "success": e.success}
        for e in entries
    ]
