"""SQLite database engine, schema, and registry store via SQLAlchemy Core."""

from lendctl.infrastructure.database.engine import create_db_engine, init_database
from lendctl.infrastructure.database.schema import (
    clock,
    loan_history,
    loans,
    metadata,
    registry_params,
    resources,
)
from lendctl.infrastructure.database.store import load_state, seed_parameters

__all__ = [
    "clock",
    "create_db_engine",
    "init_database",
    "load_state",
    "loan_history",
    "loans",
    "metadata",
    "registry_params",
    "resources",
    "seed_parameters",
]
