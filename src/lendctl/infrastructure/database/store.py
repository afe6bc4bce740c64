"""Load and persist the registry aggregate.

The caller owns the transaction: write functions take a ``Connection``
obtained from ``engine.begin()`` so they commit or roll back together
with the surrounding operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from lendctl.domain.keys import LoanKey
from lendctl.domain.loans import Loan, LoanAction, LoanHistoryEntry, RegistryParameters
from lendctl.domain.registry import RegistryState
from lendctl.infrastructure.database.schema import loan_history, loans, registry_params

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Connection, Row


def seed_parameters(conn: Connection, defaults: RegistryParameters) -> RegistryParameters:
    """Insert *defaults* if the ledger has no parameters yet.

    Returns the stored parameters, which win over *defaults* once the
    ledger exists.
    """
    row = conn.execute(select(registry_params).where(registry_params.c.id == 1)).first()
    if row is None:
        conn.execute(insert(registry_params).values(id=1, **defaults.model_dump()))
        return defaults
    return _params_from_row(row)


def load_state(conn: Connection) -> RegistryState:
    """Build the in-memory aggregate from the database."""
    row = conn.execute(select(registry_params).where(registry_params.c.id == 1)).one()
    state = RegistryState(parameters=_params_from_row(row))

    for loan_row in conn.execute(select(loans)):
        key = LoanKey(loan_row.resource_id, loan_row.borrower)
        state.loans[key] = Loan(
            loan_id=loan_row.loan_id,
            start_time=loan_row.start_time,
            duration=loan_row.duration,
            access_key=bytes(loan_row.access_key),
            extended=bool(loan_row.extended),
            amount_paid=loan_row.amount_paid,
        )

    history_rows = conn.execute(
        select(loan_history).order_by(
            loan_history.c.resource_id,
            loan_history.c.borrower,
            loan_history.c.position,
        )
    )
    for h in history_rows:
        key = LoanKey(h.resource_id, h.borrower)
        state.history.setdefault(key, []).append(
            LoanHistoryEntry(
                timestamp=h.timestamp,
                action=LoanAction(h.action),
                success=bool(h.success),
            )
        )
    return state


def save_parameters(conn: Connection, params: RegistryParameters) -> None:
    conn.execute(
        update(registry_params)
        .where(registry_params.c.id == 1)
        .values(**params.model_dump(exclude={"issuer"}))
    )


def upsert_loan(conn: Connection, key: LoanKey, loan: Loan) -> None:
    """Insert or replace the loan stored under *key*."""
    delete_loan(conn, key)
    conn.execute(
        insert(loans).values(
            resource_id=key.resource_id,
            borrower=key.borrower,
            **loan.model_dump(),
        )
    )


def delete_loan(conn: Connection, key: LoanKey) -> None:
    conn.execute(
        delete(loans).where(
            loans.c.resource_id == key.resource_id,
            loans.c.borrower == key.borrower,
        )
    )


def replace_history(
    conn: Connection, key: LoanKey, entries: Sequence[LoanHistoryEntry]
) -> None:
    """Rewrite the trail for *key*. Position 0 is the newest entry."""
    conn.execute(
        delete(loan_history).where(
            loan_history.c.resource_id == key.resource_id,
            loan_history.c.borrower == key.borrower,
        )
    )
    if not entries:
        return
    conn.execute(
        insert(loan_history),
        [
            {
                "resource_id": key.resource_id,
                "borrower": key.borrower,
                "position": position,
                "timestamp": entry.timestamp,
                "action": str(entry.action),
                "success": entry.success,
            }
            for position, entry in enumerate(entries)
        ],
    )


def _params_from_row(row: Row[Any]) -> RegistryParameters:
    return RegistryParameters(
        issuer=row.issuer,
        max_loan_duration=row.max_loan_duration,
        extension_fee=row.extension_fee,
        authority_contract=row.authority_contract,
        loan_counter=row.loan_counter,
    )
