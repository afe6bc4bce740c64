"""Bounded, newest-first audit trail per loan key."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lendctl.domain.loans import LoanHistoryEntry

HISTORY_LIMIT = 10


def prepend_entry(
    entries: Sequence[LoanHistoryEntry],
    entry: LoanHistoryEntry,
    *,
    limit: int = HISTORY_LIMIT,
) -> list[LoanHistoryEntry]:
    """Return a new trail with *entry* first, trimmed to *limit* entries.

    The oldest entries are evicted silently.
    """
    return [entry, *entries][:limit]
