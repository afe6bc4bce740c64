"""LoanService — the loan lifecycle: start, check, end, extend.

Pipeline per operation: VALIDATE → COLLABORATE → APPLY → RECORD → RESPOND

Checks run in a fixed order and the first failure wins. Nothing is
written until every check has passed; the one exception is the
``access-denied`` entry that ``check_access`` records for an expired loan.
"""

from __future__ import annotations

import structlog

from lendctl.domain.errors import ErrorCode
from lendctl.domain.keys import LoanKey
from lendctl.domain.lifecycle import LoanStatus, is_valid_transition, stored_status
from lendctl.domain.loans import Loan, LoanAction, fits_ledger, is_valid_duration
from lendctl.services._helpers import history_payload, loan_payload
from lendctl.services.base import BaseService
from lendctl.services.contracts import (
    AccessData,
    EndLoanData,
    HistoryResultData,
    LoanData,
    LoanListResultData,
    dump_validated,
)
from lendctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class LoanService(BaseService):
    """Executes loan lifecycle operations against the ledger."""

    # ------------------------------------------------------------------
    # Lifecycle operations
    # ------------------------------------------------------------------

    def start_loan(
        self,
        resource_id: int,
        borrower: str,
        duration: int,
        access_key: bytes,
        amount_paid: int,
        *,
        caller: str | None,
    ) -> ServiceResult:
        """Open a loan for (*resource_id*, *borrower*) and return its id.

        Only the issuer may start loans. The payment of *amount_paid* is
        requested from the payment authority on behalf of the caller.
        """
        op = "start_loan"
        key = LoanKey(resource_id, borrower)

        with self._ledger.transaction() as txn:
            # ── VALIDATE ─────────────────────────────────────────
            params = txn.parameters
            if caller != params.issuer:
                return self._fail(op, ErrorCode.NOT_AUTHORIZED, caller=caller)
            if not is_valid_duration(duration, params.max_loan_duration):
                return self._fail(
                    op,
                    ErrorCode.INVALID_DURATION,
                    duration=duration,
                    max_loan_duration=params.max_loan_duration,
                )
            if not access_key:
                return self._fail(op, ErrorCode.INVALID_KEY)
            if amount_paid <= 0 or not fits_ledger(amount_paid):
                return self._fail(op, ErrorCode.INVALID_PAYMENT, amount_paid=amount_paid)
            owner = None
            if fits_ledger(resource_id):
                owner = self._ledger.ownership.get_owner(resource_id)
            if owner is None:
                return self._fail(op, ErrorCode.RESOURCE_NOT_FOUND, resource_id=resource_id)
            if txn.state.loan_for(key) is not None:
                return self._fail(op, ErrorCode.LOAN_ALREADY_ACTIVE, key=str(key))

            # ── COLLABORATE ──────────────────────────────────────
            if not self._ledger.payments.process_payment(amount_paid, caller):
                return self._fail(op, ErrorCode.PAYMENT_FAILED, amount=amount_paid)

            # ── APPLY ────────────────────────────────────────────
            loan = Loan(
                loan_id=params.loan_counter,
                start_time=txn.height,
                duration=duration,
                access_key=bytes(access_key),
                extended=False,
                amount_paid=amount_paid,
            )
            txn.put_loan(key, loan)
            txn.update_parameters(loan_counter=params.loan_counter + 1)

            # ── RECORD ───────────────────────────────────────────
            txn.record(key, LoanAction.START_LOAN, success=True)
            height = txn.height

        log.info(
            "loan.started",
            loan_id=loan.loan_id,
            resource_id=resource_id,
            borrower=borrower,
            duration=duration,
            height=height,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(LoanData, loan_payload(key, loan, height)),
        )

    def check_access(self, resource_id: int, borrower: str) -> ServiceResult:
        """Return the access key while the loan window is open.

        An expired loan is reported (and audited) but not removed.
        """
        op = "check_access"
        key = LoanKey(resource_id, borrower)

        with self._ledger.transaction() as txn:
            loan = txn.state.loan_for(key)
            if loan is None:
                return self._fail(op, ErrorCode.LOAN_NOT_FOUND, key=str(key))
            if loan.is_expired(txn.height):
                txn.record(key, LoanAction.ACCESS_DENIED, success=False)
                log.info("loan.access_denied", key=str(key), height=txn.height)
                return self._fail(
                    op,
                    ErrorCode.LOAN_EXPIRED,
                    expires_at=loan.expires_at,
                    height=txn.height,
                )
            height = txn.height

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                AccessData,
                {
                    "resource_id": resource_id,
                    "borrower": borrower,
                    "access_key": loan.access_key.hex(),
                    "expires_at": loan.expires_at,
                    "height": height,
                },
            ),
        )

    def end_loan(self, resource_id: int, borrower: str, *, caller: str | None) -> ServiceResult:
        """Close the loan for (*resource_id*, *borrower*).

        The issuer may end a loan at any time; anyone else only once the
        window has elapsed.
        """
        op = "end_loan"
        key = LoanKey(resource_id, borrower)

        with self._ledger.transaction() as txn:
            loan = txn.state.loan_for(key)
            if loan is None:
                return self._fail(op, ErrorCode.LOAN_NOT_FOUND, key=str(key))
            elapsed = loan.has_elapsed(txn.height)
            if caller != txn.parameters.issuer and not elapsed:
                return self._fail(
                    op,
                    ErrorCode.NOT_AUTHORIZED,
                    caller=caller,
                    expires_at=loan.expires_at,
                )
            txn.delete_loan(key)
            txn.record(key, LoanAction.END_LOAN, success=True)
            height = txn.height

        log.info("loan.ended", loan_id=loan.loan_id, key=str(key), caller=caller, height=height)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                EndLoanData,
                {
                    "resource_id": resource_id,
                    "borrower": borrower,
                    "loan_id": loan.loan_id,
                    "ended_at": height,
                    "expired": elapsed,
                },
            ),
        )

    def extend_loan(
        self,
        resource_id: int,
        borrower: str,
        additional_duration: int,
        *,
        caller: str | None,
    ) -> ServiceResult:
        """Lengthen an open loan once, charging the extension fee."""
        op = "extend_loan"
        key = LoanKey(resource_id, borrower)

        with self._ledger.transaction() as txn:
            # ── VALIDATE ─────────────────────────────────────────
            params = txn.parameters
            loan = txn.state.loan_for(key)
            if loan is None:
                return self._fail(op, ErrorCode.LOAN_NOT_FOUND, key=str(key))
            if caller != params.issuer:
                return self._fail(op, ErrorCode.NOT_AUTHORIZED, caller=caller)
            if not is_valid_transition(stored_status(loan), LoanStatus.EXTENDED):
                return self._fail(op, ErrorCode.ALREADY_EXTENDED, key=str(key))
            if not is_valid_duration(additional_duration, params.max_loan_duration):
                return self._fail(
                    op,
                    ErrorCode.INVALID_DURATION,
                    duration=additional_duration,
                    max_loan_duration=params.max_loan_duration,
                )
            if loan.is_expired(txn.height):
                return self._fail(
                    op,
                    ErrorCode.LOAN_EXPIRED,
                    expires_at=loan.expires_at,
                    height=txn.height,
                )
            fee = params.extension_fee
            if not fits_ledger(loan.duration + additional_duration):
                return self._fail(
                    op,
                    ErrorCode.INVALID_DURATION,
                    duration=additional_duration,
                    current_duration=loan.duration,
                )
            if not fits_ledger(loan.amount_paid + fee):
                return self._fail(op, ErrorCode.INVALID_PAYMENT, amount=fee)

            # ── COLLABORATE ──────────────────────────────────────
            if not self._ledger.payments.process_payment(fee, caller):
                return self._fail(op, ErrorCode.PAYMENT_FAILED, amount=fee)

            # ── APPLY ────────────────────────────────────────────
            loan = loan.model_copy(
                update={
                    "duration": loan.duration + additional_duration,
                    "extended": True,
                    "amount_paid": loan.amount_paid + fee,
                }
            )
            txn.put_loan(key, loan)

            # ── RECORD ───────────────────────────────────────────
            txn.record(key, LoanAction.EXTEND_LOAN, success=True)
            height = txn.height

        log.info(
            "loan.extended",
            loan_id=loan.loan_id,
            key=str(key),
            additional_duration=additional_duration,
            fee=fee,
            height=height,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(LoanData, loan_payload(key, loan, height)),
        )

    # ------------------------------------------------------------------
    # Read-only queries
    # ------------------------------------------------------------------

    def get_loan(self, resource_id: int, borrower: str) -> ServiceResult:
        """Current loan fields and derived status. Records no history."""
        op = "get_loan"
        key = LoanKey(resource_id, borrower)
        loan = self._ledger.state.loan_for(key)
        if loan is None:
            return self._fail(op, ErrorCode.LOAN_NOT_FOUND, key=str(key))
        height = self._ledger.clock.current_height()
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(LoanData, loan_payload(key, loan, height)),
            meta={"height": height},
        )

    def get_history(self, resource_id: int, borrower: str) -> ServiceResult:
        """Audit trail for a key, newest first. Survives the loan itself."""
        entries = self._ledger.state.history_for(LoanKey(resource_id, borrower))
        return ServiceResult(
            ok=True,
            op="get_history",
            data=dump_validated(
                HistoryResultData,
                {
                    "resource_id": resource_id,
                    "borrower": borrower,
                    "count": len(entries),
                    "items": history_payload(entries),
                },
            ),
        )

    def list_loans(self, *, include_expired: bool = True) -> ServiceResult:
        """All current loans ordered by loan id."""
        height = self._ledger.clock.current_height()
        loans = sorted(self._ledger.state.loans.items(), key=lambda kv: kv[1].loan_id)
        items = [
            loan_payload(key, loan, height)
            for key, loan in loans
            if include_expired or not loan.is_expired(height)
        ]
        return ServiceResult(
            ok=True,
            op="list_loans",
            data=dump_validated(
                LoanListResultData,
                {"height": height, "count": len(items), "items": items},
            ),
        )
