"""RegistryState — the aggregate owning all loan state.

Operations receive the aggregate explicitly (through a ledger
transaction) instead of reaching for module-level state. History is
keyed independently of the loan map: ending a loan never clears it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lendctl.domain.keys import LoanKey
from lendctl.domain.loans import Loan, LoanHistoryEntry, RegistryParameters


@dataclass
class RegistryState:
    """Configuration, live loans, and audit trails of one registry."""

    parameters: RegistryParameters
    loans: dict[LoanKey, Loan] = field(default_factory=dict)
    history: dict[LoanKey, list[LoanHistoryEntry]] = field(default_factory=dict)

    def loan_for(self, key: LoanKey) -> Loan | None:
        return self.loans.get(key)

    def history_for(self, key: LoanKey) -> list[LoanHistoryEntry]:
        return list(self.history.get(key, []))

    def snapshot(self) -> RegistryState:
        """Copy the aggregate for rollback.

        Models are frozen, so copying the containers is enough.
        """
        return RegistryState(
            parameters=self.parameters,
            loans=dict(self.loans),
            history={key: list(entries) for key, entries in self.history.items()},
        )
