"""Tests for the info CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from monoctl.cli import cli


@pytest.mark.usefixtures("_isolated_repo")
class TestInfoCommand:
    def test_info(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "monoctl.toml" in result.stdout
        assert "project_dirs: libs, apps" in result.stdout

    def test_info_json(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "info"])
        data = json.loads(result.stdout)
        assert data["data"]["repo_root"] == str(repo_root)
        assert data["data"]["count"] == 4

    def test_info_explicit_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "alt.toml"
        config.write_text('[workspace]\nproject_dirs = ["apps"]\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "-c", str(config), "info"])
        data = json.loads(result.stdout)
        assert [i["name"] for i in data["data"]["items"]] == ["api", "web"]

    def test_invalid_descriptor_warns(self, cli_runner: CliRunner, repo_root: Path) -> None:
        broken = repo_root / "libs" / "broken"
        broken.mkdir()
        (broken / "pyproject.toml").write_text("[project]\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["info"])
        assert result.exit_code == 0
        assert "WARNING:" in result.stderr
        assert "broken" not in result.stdout
