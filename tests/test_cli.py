"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from stockmaster.cli import cli
from stockmaster.services.assistant_service import MISSING_KEY_REPLY, MISSING_KEY_SUMMARY
from stockmaster.utils.config import get_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(get_config().env, "gemini_api_key", None)


class TestCli:

    def test_products(self, runner):
        result = runner.invoke(cli, ["products", "--search", "RM-00"])

        assert result.exit_code == 0
        assert "Steel Rods" in result.output
        assert "Fabric Roll" in result.output

    def test_low_stock_products(self, runner):
        result = runner.invoke(cli, ["products", "--low-stock", "--limit", "500"])

        assert result.exit_code == 0
        assert "Office Chair" in result.output
        assert "Steel Rods" not in result.output

    def test_operations(self, runner):
        result = runner.invoke(cli, ["operations", "--warehouse", "Production Floor"])

        assert result.exit_code == 0
        assert "op3" in result.output
        assert "op2" not in result.output

    def test_validate_transfer(self, runner):
        result = runner.invoke(cli, ["validate", "op3"])

        assert result.exit_code == 0
        assert "op3: completed (Draft -> Done)" in result.output

    def test_validate_short_delivery(self, runner):
        result = runner.invoke(cli, ["validate", "op2"])

        assert result.exit_code == 1
        assert "insufficient_stock" in result.output

    def test_validate_twice(self, runner):
        result = runner.invoke(cli, ["validate", "op3", "op3"])

        assert result.exit_code == 0
        assert "op3: noop" in result.output

    def test_validate_outside_geofence(self, runner):
        result = runner.invoke(cli, ["validate", "op3", "--geofence", "--at", "Distribution Center"])

        assert result.exit_code == 1
        assert "Geofence Violation" in result.output

    def test_validate_unknown_operation(self, runner):
        result = runner.invoke(cli, ["validate", "nope"])

        assert result.exit_code == 1

    def test_distance(self, runner):
        result = runner.invoke(cli, ["distance", "0", "0", "1", "0"])

        assert result.exit_code == 0
        assert result.output.strip() == "111194.9 m"

    def test_summary_without_key(self, runner, no_api_key):
        result = runner.invoke(cli, ["summary"])

        assert result.exit_code == 0
        assert MISSING_KEY_SUMMARY in result.output

    def test_ask_without_key(self, runner, no_api_key):
        result = runner.invoke(cli, ["ask", "how many chairs?"])

        assert MISSING_KEY_REPLY in result.output

    def test_config_info(self, runner, no_api_key):
        result = runner.invoke(cli, ["config-info"])

        assert result.exit_code == 0
        assert "Configuration Settings:" in result.output
        assert "not set" in result.output
