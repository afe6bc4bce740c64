"""Database engine setup for SQLite with WAL mode.

The DB is stored at {ledger_root}/.lendctl/lendctl.db. SQLAlchemy Core
(not ORM) is used because lendctl is a short-lived CLI process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine

from lendctl.infrastructure.database.schema import clock, metadata

DATA_DIRNAME = ".lendctl"
DB_FILENAME = "lendctl.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(ledger_root: Path) -> Engine:
    """Initialize the lendctl database at ``{ledger_root}/.lendctl/lendctl.db``.

    Creates the data directory, all tables, and the clock row.
    Safe to call again on an existing ledger.
    """
    data_dir = ledger_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(data_dir / DB_FILENAME)
    metadata.create_all(engine)
    _seed_clock(engine)
    return engine


def _seed_clock(engine: Engine) -> None:
    """Insert the clock row at height 0 if it doesn't exist."""
    with engine.begin() as conn:
        row = conn.execute(select(clock.c.id).where(clock.c.id == 1)).first()
        if row is None:
            conn.execute(insert(clock).values(id=1, height=0))
