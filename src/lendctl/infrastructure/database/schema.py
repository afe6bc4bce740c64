"""SQLAlchemy Core table definitions for the lendctl database.

Loans and their history are keyed by the composite (resource_id,
borrower) pair. History rows carry an explicit ``position`` (0 = newest)
so the newest-first order survives a round trip.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Integer,
    LargeBinary,
    MetaData,
    PrimaryKeyConstraint,
    Table,
    Text,
)

metadata = MetaData()

registry_params = Table(
    "registry_params",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("issuer", Text, nullable=False),
    Column("max_loan_duration", Integer, nullable=False),
    Column("extension_fee", Integer, nullable=False),
    Column("authority_contract", Text),
    Column("loan_counter", Integer, nullable=False, default=0, server_default="0"),
    CheckConstraint("id = 1", name="single_row"),
)

loans = Table(
    "loans",
    metadata,
    Column("resource_id", Integer, nullable=False),
    Column("borrower", Text, nullable=False),
    Column("loan_id", Integer, nullable=False, unique=True),
    Column("start_time", Integer, nullable=False),
    Column("duration", Integer, nullable=False),
    Column("access_key", LargeBinary, nullable=False),
    Column("extended", Boolean, nullable=False, default=False),
    Column("amount_paid", Integer, nullable=False),
    PrimaryKeyConstraint("resource_id", "borrower"),
)

loan_history = Table(
    "loan_history",
    metadata,
    Column("resource_id", Integer, nullable=False),
    Column("borrower", Text, nullable=False),
    Column("position", Integer, nullable=False),
    Column("timestamp", Integer, nullable=False),
    Column("action", Text, nullable=False),
    Column("success", Boolean, nullable=False),
    PrimaryKeyConstraint("resource_id", "borrower", "position"),
)

resources = Table(
    "resources",
    metadata,
    Column("resource_id", Integer, primary_key=True),
    Column("owner", Text, nullable=False),
)

clock = Table(
    "clock",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("height", Integer, nullable=False, default=0, server_default="0"),
    CheckConstraint("id = 1", name="single_row"),
)
