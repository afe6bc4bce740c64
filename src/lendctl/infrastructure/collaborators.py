"""Collaborator interfaces consumed by the registry, plus in-memory adapters.

The registry never settles payments, resolves custody, or advances time
itself. It reaches these concerns through the protocols below, which
are injected into the :class:`~lendctl.infrastructure.ledger.Ledger`.
The in-memory adapters give embedders and tests deterministic answers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from lendctl.domain.loans import LEDGER_INT_MAX


@runtime_checkable
class PaymentAuthority(Protocol):
    """Approves or declines a payment of *amount* from *payer*."""

    def process_payment(self, amount: int, payer: str) -> bool: ...


@runtime_checkable
class ResourceOwnership(Protocol):
    """Resolves the current owner of a resource, if any."""

    def get_owner(self, resource_id: int) -> str | None: ...


class ResourceCatalog(ResourceOwnership, Protocol):
    """Ownership source that the hosting environment can also populate."""

    def register(self, resource_id: int, owner: str) -> None: ...

    def list_resources(self) -> dict[int, str]: ...


@runtime_checkable
class Clock(Protocol):
    """Non-decreasing current height, advanced by the host."""

    def current_height(self) -> int: ...


class AdjustableClock(Clock, Protocol):
    """Clock the hosting environment can move forward."""

    def advance(self, blocks: int) -> int: ...

    def set(self, height: int) -> int: ...


def check_height_move(current: int, target: int) -> None:
    """Reject a clock move to *target* that goes backwards or overflows.

    Raises:
        ValueError: If *target* is lower than *current* or beyond the
            largest height the ledger can store.
    """
    if target < current:
        msg = f"Height cannot decrease (current {current}, requested {target})"
        raise ValueError(msg)
    if target > LEDGER_INT_MAX:
        msg = f"Height {target} exceeds the ledger maximum {LEDGER_INT_MAX}"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# In-memory adapters
# ---------------------------------------------------------------------------


@dataclass
class StaticPaymentAuthority:
    """Answers every payment with a fixed decision and records the calls."""

    approve: bool = True
    calls: list[tuple[int, str]] = field(default_factory=list)

    def process_payment(self, amount: int, payer: str) -> bool:
        self.calls.append((amount, payer))
        return self.approve


@dataclass
class StaticOwnership:
    """Dict-backed ownership lookup."""

    owners: dict[int, str] = field(default_factory=dict)

    def get_owner(self, resource_id: int) -> str | None:
        return self.owners.get(resource_id)

    def register(self, resource_id: int, owner: str) -> None:
        self.owners[resource_id] = owner

    def list_resources(self) -> dict[int, str]:
        return dict(sorted(self.owners.items()))


@dataclass
class ManualClock:
    """In-memory height, moved only through :meth:`advance` and :meth:`set`."""

    height: int = 0

    def current_height(self) -> int:
        return self.height

    def advance(self, blocks: int) -> int:
        self.set(self.height + blocks)
        return self.height

    def set(self, height: int) -> int:
        check_height_move(self.height, height)
        self.height = height
        return self.height
