"""Tests for the params, authority, resource, and clock command groups."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from lendctl.cli import cli
from lendctl.domain.keys import BURN_IDENTITY


def _json(runner: CliRunner, *args: str) -> tuple[int, dict]:
    result = runner.invoke(cli, ["--json", *args])
    return result.exit_code, json.loads(result.output)


@pytest.mark.usefixtures("_isolated_ledger")
class TestParamsCommand:
    def test_show_defaults(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "params", "show")
        assert code == 0
        assert data["data"]["issuer"] == "ST1LIBRARY"
        assert data["data"]["authority_contract"] is None

    def test_show_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["params", "show"])
        assert result.exit_code == 0
        assert "issuer: ST1LIBRARY" in result.output
        assert "(not set)" in result.output

    def test_issuer_from_config(self, cli_runner: CliRunner) -> None:
        with open("lendctl.toml", "w", encoding="utf-8") as fh:
            fh.write('[registry]\nissuer = "ST7ISSUER"\n')
        _, data = _json(cli_runner, "params", "show")
        assert data["data"]["issuer"] == "ST7ISSUER"

    def test_set_requires_authority(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "--caller", "ST1LIBRARY", "params", "set-max-duration", "5")
        assert code == 1
        assert data["error"]["code"] == 100

    def test_authority_amends(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["authority", "set", "ST2AUTH"]).exit_code == 0

        code, data = _json(cli_runner, "--caller", "ST2AUTH", "params", "set-max-duration", "5")
        assert code == 0
        assert data["data"]["max_loan_duration"] == 5

        code, data = _json(cli_runner, "--caller", "ST2AUTH", "params", "set-extension-fee", "0")
        assert code == 0
        assert data["data"]["extension_fee"] == 0

    def test_invalid_fee(self, cli_runner: CliRunner) -> None:
        code, data = _json(
            cli_runner, "--caller", "ST2AUTH", "params", "set-extension-fee", "--", "-1"
        )
        assert code == 1
        assert data["error"]["code"] == 108


@pytest.mark.usefixtures("_isolated_ledger")
class TestAuthorityCommand:
    def test_one_shot(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "authority", "set", "ST2AUTH")
        assert code == 0
        assert data["data"]["authority_contract"] == "ST2AUTH"

        code, data = _json(cli_runner, "authority", "set", "ST3OTHER")
        assert code == 1
        assert data["error"]["code"] == 100

    def test_burn_identity(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "authority", "set", BURN_IDENTITY)
        assert code == 1
        assert data["error"]["code"] == 100


@pytest.mark.usefixtures("_isolated_ledger")
class TestResourceCommand:
    def test_register_and_list(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["resource", "register", "2", "ST2OWNER"]).exit_code == 0
        assert cli_runner.invoke(cli, ["resource", "register", "1", "ST1OWNER"]).exit_code == 0
        code, data = _json(cli_runner, "resource", "list")
        assert code == 0
        assert [i["resource_id"] for i in data["data"]["items"]] == [1, 2]

    def test_list_empty_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resource", "list"])
        assert "No resources registered." in result.output


@pytest.mark.usefixtures("_isolated_ledger")
class TestClockCommand:
    def test_show(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["clock", "show"])
        assert result.exit_code == 0
        assert result.output.strip() == "height 0"

    def test_advance_persists(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["clock", "advance", "10"])
        result = cli_runner.invoke(cli, ["-q", "clock", "show"])
        assert result.output.strip() == "10"

    def test_advance_negative_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["clock", "advance", "--", "-1"])
        assert result.exit_code == 2

    def test_set_backwards(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["clock", "set", "100"])
        result = cli_runner.invoke(cli, ["clock", "set", "50"])
        assert result.exit_code == 1
        assert "cannot decrease" in result.output


@pytest.mark.usefixtures("_isolated_ledger")
class TestInvalidConfig:
    def test_bad_issuer_reported(self, cli_runner: CliRunner) -> None:
        with open("lendctl.toml", "w", encoding="utf-8") as fh:
            fh.write('[registry]\nissuer = ""\n')
        result = cli_runner.invoke(cli, ["params", "show"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_bad_toml_reported(self, cli_runner: CliRunner) -> None:
        with open("lendctl.toml", "w", encoding="utf-8") as fh:
            fh.write("[registry\n")
        result = cli_runner.invoke(cli, ["params", "show"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


@pytest.mark.usefixtures("_isolated_ledger")
class TestLedgerRange:
    def test_clock_advance_overflow(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["clock", "advance", str(2**63)])
        assert result.exit_code == 1
        assert "ledger maximum" in result.output

    def test_resource_id_overflow(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["resource", "register", str(2**64), "ST1OWNER"])
        assert result.exit_code == 1
        assert "outside the ledger integer range" in result.output
