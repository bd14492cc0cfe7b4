"""Tests for the ``user`` command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from followctl.cli import cli


@pytest.mark.usefixtures("_isolated_root")
class TestUserCommands:
    def test_create_then_get(self, cli_runner: CliRunner) -> None:
        created = cli_runner.invoke(cli, ["--json", "user", "create", "zoe", "zoe@example.com"])
        assert created.exit_code == 0
        user_id = json.loads(created.stdout)["data"]["user"]["id"]

        result = cli_runner.invoke(cli, ["user", "get", str(user_id)])
        assert result.exit_code == 0
        assert "zoe" in result.stdout
        assert "followers_count" in result.stdout

    def test_create_duplicate(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "create", "zoe", "zoe@example.com"])
        result = cli_runner.invoke(cli, ["--json", "user", "create", "zoe", "z2@example.com"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "DUPLICATE_USER"

    def test_get_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["user", "get", "5"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "NOT_FOUND" in result.stderr

    def test_list_pages(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "--seed"])
        result = cli_runner.invoke(cli, ["--json", "user", "list", "--limit", "3", "--offset", "2"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert [u["username"] for u in data["users"]] == ["charlie", "diana", "eve"]
        assert data["total"] == 10

    def test_list_limit_from_config(self, cli_runner: CliRunner) -> None:
        with open("followctl.toml", "w", encoding="utf-8") as fh:
            fh.write("[pagination]\ndefault_limit = 4\nmax_limit = 5\n")
        cli_runner.invoke(cli, ["init", "--seed"])
        result = cli_runner.invoke(cli, ["--json", "user", "list", "--limit", "6"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["count"] == 4

    def test_group_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["user", "--examples"])
        assert result.exit_code == 0
        assert "followctl user get 1" in result.output
