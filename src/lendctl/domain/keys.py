"""Identities and the composite loan key.

A loan is identified by the pair (resource, borrower). The pair is a
structural value, so identities containing any character (including
separators used for display) can never collide.
"""

from __future__ import annotations

from dataclasses import dataclass

# The null/burn principal. Never accepted as an authority.
BURN_IDENTITY = "SP000000000000000000002Q6VF78"


@dataclass(frozen=True, order=True)
class LoanKey:
    """Composite key of one loan: resource identifier + borrower identity."""

    resource_id: int
    borrower: str

    def __str__(self) -> str:
        return f"{self.resource_id}:{self.borrower}"


def is_burn_identity(identity: str) -> bool:
    """Check whether *identity* is the reserved burn identity."""
    return identity.strip() == BURN_IDENTITY


def is_assignable_identity(identity: str | None) -> bool:
    """Check whether *identity* may be stored as a privileged identity.

    Blank strings and the burn identity are rejected.
    """
    if identity is None or not identity.strip():
        return False
    return not is_burn_identity(identity)
