"""Tests for upgrade, health, and check CLI commands."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest
from click.testing import CliRunner

from followctl.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestUpgradeCommand:
    def test_check_only_on_unstamped(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "upgrade", "--check"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["current"] is None
        assert data["pending_count"] == 1

    def test_upgrade_after_init_is_noop(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "upgrade"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["applied_count"] == 0

    def test_upgrade_stamps_unversioned(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "upgrade"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["stamped"] is True

    def test_stamp_flag(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "upgrade", "--stamp"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["op"] == "stamp"
        assert payload["data"]["current"] == "001_baseline"

    def test_check_and_stamp_conflict(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["upgrade", "--check", "--stamp"])
        assert result.exit_code == 2
        assert "cannot be combined" in result.stderr


@pytest.mark.usefixtures("_isolated_root")
class TestHealthCommand:
    def test_ready_by_default(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "health"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "health_ready"
        assert data["data"]["status"] == "Ready"

    def test_live_skips_database(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "health", "--live"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == {"status": "OK"}
        assert not (tmp_path / ".followctl").exists()


@pytest.mark.usefixtures("_isolated_root")
class TestCheckCommand:
    def test_check_clean(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "--seed"])
        cli_runner.invoke(cli, ["follow", "1", "2"])
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "OK" in result.stdout
        assert "edges" in result.stdout

    def test_check_detects_drift(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(cli, ["init", "--seed"])
        conn = sqlite3.connect(tmp_path / ".followctl" / "followctl.db")
        try:
            conn.execute("UPDATE users SET followers_count = 3 WHERE id = 1")
            conn.commit()
        finally:
            conn.close()

        result = cli_runner.invoke(cli, ["check"])

        assert result.exit_code == 1
        assert result.stdout == ""
        assert "COUNTER_DRIFT" in result.stderr
