"""Tests for collaborator adapters: payments, ownership, and clocks."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from lendctl.config.models import PaymentConfig
from lendctl.infrastructure.clock import StoredClock
from lendctl.infrastructure.collaborators import (
    Clock,
    ManualClock,
    PaymentAuthority,
    ResourceOwnership,
    StaticOwnership,
    StaticPaymentAuthority,
    check_height_move,
)
from lendctl.infrastructure.database.engine import init_database
from lendctl.infrastructure.payments import PolicyPaymentAuthority
from lendctl.infrastructure.resources import ResourceRegistry


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine]:
    eng = init_database(tmp_path)
    yield eng
    eng.dispose()


class TestProtocols:
    def test_adapters_satisfy_protocols(self, engine: Engine) -> None:
        assert isinstance(StaticPaymentAuthority(), PaymentAuthority)
        assert isinstance(PolicyPaymentAuthority(PaymentConfig()), PaymentAuthority)
        assert isinstance(StaticOwnership(), ResourceOwnership)
        assert isinstance(ResourceRegistry(engine), ResourceOwnership)
        assert isinstance(ManualClock(), Clock)
        assert isinstance(StoredClock(engine), Clock)


class TestCheckHeightMove:
    def test_forward_and_same(self) -> None:
        check_height_move(5, 5)
        check_height_move(5, 6)

    def test_backwards(self) -> None:
        with pytest.raises(ValueError, match="current 5, requested 4"):
            check_height_move(5, 4)

    def test_beyond_ledger_range(self) -> None:
        with pytest.raises(ValueError, match="exceeds the ledger maximum"):
            check_height_move(0, 2**63)


class TestStaticPaymentAuthority:
    def test_records_calls(self) -> None:
        payments = StaticPaymentAuthority(approve=False)
        assert payments.process_payment(10, "ST1") is False
        assert payments.calls == [(10, "ST1")]


class TestPolicyPaymentAuthority:
    def test_approves_by_default(self) -> None:
        assert PolicyPaymentAuthority(PaymentConfig()).process_payment(500, "ST1LIBRARY")

    def test_disabled(self) -> None:
        policy = PolicyPaymentAuthority(PaymentConfig(enabled=False))
        assert not policy.process_payment(1, "ST1LIBRARY")

    def test_max_amount(self) -> None:
        policy = PolicyPaymentAuthority(PaymentConfig(max_amount=500))
        assert policy.process_payment(500, "ST1LIBRARY")
        assert not policy.process_payment(501, "ST1LIBRARY")

    def test_declined_payer(self) -> None:
        policy = PolicyPaymentAuthority(PaymentConfig(declined_payers=["ST1LIBRARY"]))
        assert not policy.process_payment(1, "ST1LIBRARY")
        assert policy.process_payment(1, "ST2OTHER")


class TestOwnership:
    def test_static(self) -> None:
        owners = StaticOwnership({2: "ST2", 1: "ST1"})
        assert owners.get_owner(1) == "ST1"
        assert owners.get_owner(3) is None
        assert list(owners.list_resources()) == [1, 2]

    def test_registry_register_and_lookup(self, engine: Engine) -> None:
        registry = ResourceRegistry(engine)
        assert registry.get_owner(1) is None
        registry.register(1, "ST1OWNER")
        assert registry.get_owner(1) == "ST1OWNER"

    def test_registry_replaces_owner(self, engine: Engine) -> None:
        registry = ResourceRegistry(engine)
        registry.register(1, "ST1OWNER")
        registry.register(1, "ST2OWNER")
        assert registry.list_resources() == {1: "ST2OWNER"}

    def test_registry_list_sorted(self, engine: Engine) -> None:
        registry = ResourceRegistry(engine)
        registry.register(9, "ST9")
        registry.register(3, "ST3")
        assert list(registry.list_resources()) == [3, 9]


class TestClocks:
    def test_manual_clock(self) -> None:
        clock = ManualClock()
        assert clock.advance(10) == 10
        assert clock.set(10) == 10
        with pytest.raises(ValueError):
            clock.set(9)
        assert clock.current_height() == 10

    def test_stored_clock_persists(self, engine: Engine) -> None:
        StoredClock(engine).advance(1441)
        assert StoredClock(engine).current_height() == 1441

    def test_stored_clock_rejects_regression(self, engine: Engine) -> None:
        clock = StoredClock(engine)
        clock.set(100)
        with pytest.raises(ValueError):
            clock.set(50)
        with pytest.raises(ValueError):
            clock.advance(-1)
        assert clock.current_height() == 100
