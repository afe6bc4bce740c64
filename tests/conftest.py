"""Shared pytest fixtures for lendctl tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from lendctl.config.settings import LendSettings
from lendctl.infrastructure.collaborators import (
    ManualClock,
    StaticOwnership,
    StaticPaymentAuthority,
)
from lendctl.infrastructure.ledger import Ledger
from lendctl.services.loans import LoanService

ISSUER = "ST1LIBRARY"
BORROWER = "ST2BORROWER"
ACCESS_KEY = b"a" * 32


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer env vars from leaking into settings."""
    for name in ("LENDCTL_CONFIG", "LENDCTL_CALLER"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> LendSettings:
    return LendSettings.from_cli(ledger_root=tmp_path)


@pytest.fixture
def payments() -> StaticPaymentAuthority:
    return StaticPaymentAuthority(approve=True)


@pytest.fixture
def ownership() -> StaticOwnership:
    return StaticOwnership({1: "ST1OWNER"})


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(height=0)


@pytest.fixture
def ledger(
    settings: LendSettings,
    payments: StaticPaymentAuthority,
    ownership: StaticOwnership,
    clock: ManualClock,
) -> Generator[Ledger]:
    """Ledger on a temp directory with in-memory collaborators."""
    lg = Ledger(settings, payments=payments, ownership=ownership, clock=clock)
    try:
        yield lg
    finally:
        lg.close()


@pytest.fixture
def start_loan(ledger: Ledger) -> Callable[..., dict[str, Any]]:
    """Start a loan as the issuer, asserting success."""

    def _start(
        resource_id: int = 1,
        borrower: str = BORROWER,
        duration: int = 1440,
        access_key: bytes = ACCESS_KEY,
        amount_paid: int = 500,
    ) -> dict[str, Any]:
        result = LoanService(ledger).start_loan(
            resource_id, borrower, duration, access_key, amount_paid, caller=ISSUER
        )
        assert result.ok, result.error
        return result.data

    return _start


@pytest.fixture
def _isolated_ledger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated ledger.

    Use via ``@pytest.mark.usefixtures("_isolated_ledger")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
