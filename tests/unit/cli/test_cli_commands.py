# SPDX-License-Identifier: Apache-2.0
"""Tests for the sodamachine CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from sodamachine.cli import app

runner = CliRunner()

CONFIG_YAML = """
config_version: "1"
machine-id: 4
max-slots: 2
slots:
  - id: 1
    capacity: 5
    quantity: 1
    soda:
      name: Fanta
      flavor: orange
      size: small
      price: "1.00"
"""


@pytest.fixture(autouse=True)
def _clean_bootstrap(reset_bootstrap):
    yield


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "machine.yaml"
    path.write_text(CONFIG_YAML)
    return path


class TestStatusAndList:
    def test_status_shows_default_machine(self):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert (
            "Machine 1: 1 slots, 1 available sodas (3 total), $3.75 inventory value, "
            "$0.00 inserted, $0.00 collected - Operational"
        ) in result.stdout
        assert "Slot 1: Cola (3 of 10) - Enabled" in result.stdout

    def test_list_default_machine(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Slot 1: Cola - $1.25" in result.stdout

    def test_list_from_config_file(self, config_file):
        result = runner.invoke(app, ["list", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Slot 1: Fanta - $1.00" in result.stdout

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["status", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
        assert "❌ Configuration file not found" in result.stdout


class TestBuy:
    def test_buy_with_change(self):
        result = runner.invoke(app, ["buy", "1", "--insert", "1.00", "--insert", "1.00"])

        assert result.exit_code == 0
        assert "Inserted $1.00 (balance $2.00)" in result.stdout
        assert "Dispensed Cola Cola - 12 oz (Caffeine-free) from slot 1" in result.stdout
        assert "Change: $0.75" in result.stdout

    def test_buy_exact_amount_has_no_change(self, config_file):
        result = runner.invoke(app, ["buy", "1", "-i", "$1", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Dispensed Fanta" in result.stdout
        assert "Change" not in result.stdout

    def test_insufficient_funds_returns_money(self):
        result = runner.invoke(app, ["buy", "1", "--insert", "1.00"])

        assert result.exit_code == 1
        assert "Returned $1.00" in result.stdout
        assert "❌ Insufficient funds: need $1.25, have $1.00" in result.stdout

    def test_unknown_slot(self):
        result = runner.invoke(app, ["buy", "9", "--insert", "2"])

        assert result.exit_code == 1
        assert "❌ Slot 9 not found" in result.stdout

    def test_invalid_amount(self):
        result = runner.invoke(app, ["buy", "1", "--insert", "abc"])

        assert result.exit_code == 1
        assert "❌ Invalid amount" in result.stdout

    def test_insert_is_required(self):
        result = runner.invoke(app, ["buy", "1"])

        assert result.exit_code != 0


class TestConsole:
    def test_customer_lists_sodas_then_exits(self):
        result = runner.invoke(app, ["console"], input="1\n1\n1\n3\n")

        assert result.exit_code == 0
        assert "Slot 1: Cola - $1.25" in result.stdout
        assert "Goodbye!" in result.stdout

    def test_customer_buys_soda(self):
        # insert money, then buy from slot 1
        session = "1\n2\n1\n2.00\n" "1\n3\n1\n1\n" "3\n"

        result = runner.invoke(app, ["console"], input=session)

        assert result.exit_code == 0
        assert "Enjoy your Cola!" in result.stdout
        assert "Change: $0.75" in result.stdout

    def test_operator_views_status(self):
        result = runner.invoke(app, ["console"], input="2\n2\n1\n3\n")

        assert result.exit_code == 0
        assert "Machine 1: 1 slots" in result.stdout

    def test_errors_are_reported_and_console_continues(self):
        result = runner.invoke(app, ["console"], input="1\n4\n1\n3\n")

        assert result.exit_code == 0
        assert "❌ No money to return" in result.stdout
        assert "Goodbye!" in result.stdout

    def test_invalid_role(self):
        result = runner.invoke(app, ["console"], input="7\n3\n")

        assert "Invalid option" in result.stdout
