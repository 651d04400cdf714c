"""Tests for graph CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from monoctl.cli import cli


@pytest.mark.usefixtures("_isolated_repo")
class TestGraphCommands:
    def test_order(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph", "order"])
        assert result.exit_code == 0
        assert "4 subprojects" in result.output

    def test_order_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "graph", "order"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["core", "api", "util", "web"]

    def test_order_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "graph", "order"])
        data = json.loads(result.stdout)
        assert data["op"] == "order"
        assert data["data"]["count"] == 4

    def test_subtree_named(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "graph", "subtree", "web"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["core", "util", "web"]

    def test_subtree_current(
        self, cli_runner: CliRunner, repo_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(repo_root / "apps" / "api")
        result = cli_runner.invoke(cli, ["-q", "graph", "subtree"])
        assert result.stdout.split() == ["core", "api"]

    def test_subtree_unknown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "graph", "subtree", "nope"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_dependents(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "graph", "dependents", "util"])
        assert result.stdout.split() == ["web"]

    def test_show(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph", "show"])
        assert result.exit_code == 0
        assert "web -> core, util" in result.stdout

    def test_show_dot(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["graph", "show", "--dot"])
        assert result.exit_code == 0
        assert result.stdout.startswith("digraph dependencies {")
        assert '"api" -> "core";' in result.stdout

    def test_show_dot_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "graph", "show", "--dot"])
        assert result.exit_code == 0
        assert result.stdout.startswith("digraph dependencies {")
        assert '"web" -> "util";' in result.stdout


class TestGraphCycle:
    def test_cycle_fails(
        self,
        cli_runner: CliRunner,
        tmp_path: Path,
        write_project,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        write_project(tmp_path, "a", deps=["b"])
        write_project(tmp_path, "b", deps=["a"])
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["graph", "order"])
        assert result.exit_code == 1
        assert "Dependency cycle detected" in result.stderr
