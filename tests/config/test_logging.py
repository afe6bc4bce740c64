"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from io import StringIO

import pytest
import structlog

from lendctl.config.logging import (
    REDACTED,
    bind_caller,
    configure_logging,
    redact_access_keys,
)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lend = logging.getLogger("lendctl")
    lend_level = lend.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lend.setLevel(lend_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("lendctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("lendctl").level == logging.WARNING

    def test_sqlalchemy_quiet(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

    def test_single_root_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("lendctl.test")
        log.info("loan.started", loan_id=0)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "loan.started"
        assert parsed["loan_id"] == 0
        assert parsed["level"] == "info"
        assert parsed["logger"] == "lendctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("lendctl.infrastructure.ledger").warning("issuer mismatch")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "issuer mismatch"
        assert parsed["level"] == "warning"

    def test_info_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("lendctl.services.loans").info("loan.started")
        assert capfd.readouterr().err == ""

    def test_stream_override(self) -> None:
        buf = StringIO()
        configure_logging(log_json=True, stream=buf)
        logging.getLogger("lendctl.test").warning("to buffer")
        assert json.loads(buf.getvalue())["event"] == "to buffer"


class TestProcessors:
    def test_access_key_redacted(self) -> None:
        buf = StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        structlog.get_logger("lendctl.test").info("loan.started", access_key="736563726574")
        parsed = json.loads(buf.getvalue())
        assert parsed["access_key"] == REDACTED
        assert "736563726574" not in buf.getvalue()

    def test_redact_leaves_other_fields(self) -> None:
        event = redact_access_keys(None, "info", {"event": "x", "loan_id": 3})
        assert event == {"event": "x", "loan_id": 3}

    def test_bind_caller(self) -> None:
        buf = StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        bind_caller("ST1LIBRARY")
        try:
            structlog.get_logger("lendctl.test").info("loan.ended")
        finally:
            bind_caller(None)
        assert json.loads(buf.getvalue())["caller"] == "ST1LIBRARY"

    def test_bind_caller_none_clears(self) -> None:
        bind_caller("ST1LIBRARY")
        bind_caller(None)
        assert structlog.contextvars.get_contextvars() == {}
