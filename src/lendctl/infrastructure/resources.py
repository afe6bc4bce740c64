"""ResourceRegistry — ownership table stored alongside the ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from lendctl.infrastructure.database.schema import resources

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class ResourceRegistry:
    """Ownership lookup backed by the ``resources`` table.

    Registration is a hosting-environment action; the loan registry only
    reads owners through :meth:`get_owner`.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_owner(self, resource_id: int) -> str | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(resources.c.owner).where(resources.c.resource_id == resource_id)
            ).first()
        return None if row is None else str(row.owner)

    def register(self, resource_id: int, owner: str) -> None:
        """Record *owner* for *resource_id*, replacing any previous owner."""
        with self._engine.begin() as conn:
            conn.execute(delete(resources).where(resources.c.resource_id == resource_id))
            conn.execute(insert(resources).values(resource_id=resource_id, owner=owner))

    def list_resources(self) -> dict[int, str]:
        with self._engine.connect() as conn:
            rows = conn.execute(select(resources).order_by(resources.c.resource_id))
            return {int(r.resource_id): str(r.owner) for r in rows}
