"""Ledger — repository owning registry state, storage, and collaborators.

The Ledger is the single dependency injected into every service. It
loads the :class:`RegistryState` aggregate from SQLite once, and the
:meth:`transaction` context manager keeps aggregate and database in
step:

- the database through ``engine.begin()``, which commits or rolls back;
- the aggregate through a snapshot taken on entry, restored on exception.

A transaction whose block *returns* a failure result still commits.
Services run every check before their first write, so the only write a
failing operation makes is the audit entry it intends to keep.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lendctl.domain.history import prepend_entry
from lendctl.domain.loans import LoanHistoryEntry, RegistryParameters
from lendctl.infrastructure.clock import StoredClock
from lendctl.infrastructure.database import store
from lendctl.infrastructure.database.engine import init_database
from lendctl.infrastructure.payments import PolicyPaymentAuthority
from lendctl.infrastructure.resources import ResourceRegistry

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from lendctl.config.settings import LendSettings
    from lendctl.domain.keys import LoanKey
    from lendctl.domain.loans import Loan, LoanAction
    from lendctl.domain.registry import RegistryState
    from lendctl.infrastructure.collaborators import (
        AdjustableClock,
        PaymentAuthority,
        ResourceCatalog,
    )

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Write handle
# ---------------------------------------------------------------------------


@dataclass
class LedgerTransaction:
    """Active transaction: the aggregate, its DB connection, and the height.

    All writes must go through the methods below so the aggregate and
    the database never diverge. ``height`` is read once when the
    transaction opens and stamps every history entry written in it.
    """

    conn: Connection
    state: RegistryState
    height: int

    @property
    def parameters(self) -> RegistryParameters:
        return self.state.parameters

    def put_loan(self, key: LoanKey, loan: Loan) -> None:
        self.state.loans[key] = loan
        store.upsert_loan(self.conn, key, loan)

    def delete_loan(self, key: LoanKey) -> None:
        self.state.loans.pop(key, None)
        store.delete_loan(self.conn, key)

    def record(self, key: LoanKey, action: LoanAction, *, success: bool) -> LoanHistoryEntry:
        """Prepend a history entry for *key* at the transaction height."""
        entry = LoanHistoryEntry(timestamp=self.height, action=action, success=success)
        trail = prepend_entry(self.state.history.get(key, []), entry)
        self.state.history[key] = trail
        store.replace_history(self.conn, key, trail)
        return entry

    def update_parameters(self, **changes: Any) -> RegistryParameters:
        params = self.state.parameters.model_copy(update=changes)
        self.state.parameters = params
        store.save_parameters(self.conn, params)
        return params


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class Ledger:
    """Repository encapsulating registry state, storage, and collaborators.

    Constructed once at CLI startup from :class:`LendSettings`. Services
    receive the Ledger via their :class:`BaseService` constructor.
    Collaborators default to the DB- and config-backed adapters; pass
    your own to substitute them.
    """

    def __init__(
        self,
        settings: LendSettings,
        *,
        payments: PaymentAuthority | None = None,
        ownership: ResourceCatalog | None = None,
        clock: AdjustableClock | None = None,
    ) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)
        self._payments = payments or PolicyPaymentAuthority(settings.payment)
        self._ownership = ownership or ResourceRegistry(self._engine)
        self._clock = clock or StoredClock(self._engine)
        self._state = self._load(settings)

    def _load(self, settings: LendSettings) -> RegistryState:
        defaults = RegistryParameters(
            issuer=settings.registry.issuer,
            max_loan_duration=settings.registry.max_loan_duration,
            extension_fee=settings.registry.extension_fee,
        )
        with self._engine.begin() as conn:
            stored = store.seed_parameters(conn, defaults)
            if stored.issuer != defaults.issuer:
                logger.warning(
                    "Configured issuer %s ignored; ledger was created for %s",
                    defaults.issuer,
                    stored.issuer,
                )
            return store.load_state(conn)

    @property
    def root(self) -> Path:
        """The directory holding ``.lendctl/``."""
        return self._settings.ledger_root

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine of the ledger database."""
        return self._engine

    @property
    def settings(self) -> LendSettings:
        return self._settings

    @property
    def state(self) -> RegistryState:
        """The committed registry aggregate (read-only use)."""
        return self._state

    @property
    def payments(self) -> PaymentAuthority:
        return self._payments

    @property
    def ownership(self) -> ResourceCatalog:
        return self._ownership

    @property
    def clock(self) -> AdjustableClock:
        return self._clock

    @contextmanager
    def transaction(self) -> Iterator[LedgerTransaction]:
        """Coordinated transaction across the aggregate and the database.

        - DB writes use a native SQLAlchemy transaction (commit on normal
          exit, rollback on exception).
        - The aggregate is snapshotted first and restored on exception.

        Usage::

            with ledger.transaction() as txn:
                txn.put_loan(key, loan)
                txn.record(key, LoanAction.START_LOAN, success=True)
        """
        height = self._clock.current_height()
        snapshot = self._state.snapshot()
        try:
            with self._engine.begin() as conn:
                yield LedgerTransaction(conn=conn, state=self._state, height=height)
        except BaseException:
            self._state = snapshot
            raise

    def close(self) -> None:
        """Dispose of the engine's pooled connections."""
        self._engine.dispose()
