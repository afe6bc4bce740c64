"""StoredClock — current height persisted in the ledger database."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from lendctl.infrastructure.collaborators import check_height_move
from lendctl.infrastructure.database.schema import clock

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine


class StoredClock:
    """Height that survives across CLI invocations.

    Only the hosting environment moves it (``lendctl clock``); the
    registry reads it once at the start of each operation.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def current_height(self) -> int:
        with self._engine.connect() as conn:
            return self._read(conn)

    def advance(self, blocks: int) -> int:
        with self._engine.begin() as conn:
            return self._write(conn, self._read(conn) + blocks)

    def set(self, height: int) -> int:
        with self._engine.begin() as conn:
            return self._write(conn, height)

    @staticmethod
    def _read(conn: Connection) -> int:
        return int(conn.execute(select(clock.c.height).where(clock.c.id == 1)).scalar_one())

    def _write(self, conn: Connection, height: int) -> int:
        check_height_move(self._read(conn), height)
        conn.execute(update(clock).where(clock.c.id == 1).values(height=height))
        return height
