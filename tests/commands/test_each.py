"""Tests for the each CLI command."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from monoctl.cli import cli

# Writes a marker file in the project root and fails for the project named in FAIL.
SCRIPT = (
    "import os, pathlib, sys; "
    "pathlib.Path('ran.txt').write_text(' '.join(sys.argv[1:])); "
    "sys.exit(1 if os.environ['MONOCTL_PROJECT'] == os.environ.get('FAIL') else 0)"
)


def _run(*flags: str) -> list[str]:
    return ["each", *flags, sys.executable, "-c", SCRIPT]


@pytest.mark.usefixtures("_isolated_repo")
class TestEachCommand:
    def test_runs_everywhere(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, [*_run(), "one", "two"])
        assert result.exit_code == 0, result.output
        for rel in ("libs/core", "libs/util", "apps/web", "apps/api"):
            assert (repo_root / rel / "ran.txt").read_text() == "one two"
        assert "ran in 4 subprojects" in result.stdout

    def test_progress_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, _run())
        assert result.exit_code == 0
        assert "[1/4] core" in result.stderr
        assert "[4/4] web" in result.stderr
        assert "[1/4]" not in result.stdout

    def test_json_success(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", *_run()])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "each"
        assert data["data"]["completed"] == ["core", "api", "util", "web"]
        assert "[1/4]" not in result.stderr

    def test_failure_prints_resume_command(
        self, cli_runner: CliRunner, repo_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAIL", "util")
        result = cli_runner.invoke(cli, _run("--skip", "api"))
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "util failed (2/3)" in result.stderr
        assert "Resume with:" in result.stderr
        assert "--skip api --start util" in result.stderr
        assert not (repo_root / "apps" / "web" / "ran.txt").exists()

    def test_quiet_failure_prints_only_command(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FAIL", "core")
        result = cli_runner.invoke(cli, ["-q", *_run()])
        assert result.exit_code == 1
        assert result.stderr.strip().startswith("monoctl each --start core ")
        assert "[1/4]" not in result.stderr

    def test_json_failure(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAIL", "api")
        result = cli_runner.invoke(cli, ["--json", *_run()])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["ok"] is False
        assert data["error"]["code"] == "TASK_FAILED"
        assert data["data"]["resume_start"] == "api"

    def test_start_resumes(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, _run("--start", "util"))
        assert result.exit_code == 0
        assert not (repo_root / "libs" / "core" / "ran.txt").exists()
        assert (repo_root / "libs" / "util" / "ran.txt").exists()

    def test_skip_is_normalized(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "each", "--dry-run", "--skip", "UTIL", "true"])
        names = [i["name"] for i in json.loads(result.stdout)["data"]["items"]]
        assert names == ["core", "api", "web"]

    def test_select(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "each", "--dry-run", "--select", "uses-core", "x"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["api", "util", "web"]

    def test_unknown_selector(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "each", "--select", "nope", "true"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "NOT_FOUND"

    def test_no_match(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["each", "--select", "deployable", "--skip", "api", "--skip", "web", "true"]
        )
        assert result.exit_code == 1
        assert "Zero subprojects matched" in result.stderr

    def test_subtree_from_subproject(
        self, cli_runner: CliRunner, repo_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(repo_root / "libs" / "util")
        result = cli_runner.invoke(cli, ["-q", "each", "--dry-run", "--subtree", "true"])
        assert result.exit_code == 0
        assert result.stdout.split() == ["core", "util"]

    def test_subtree_outside_subproject(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["each", "--subtree", "true"])
        assert result.exit_code == 1
        assert "--subtree" in result.stderr

    def test_task_options_pass_through(self, cli_runner: CliRunner, repo_root: Path) -> None:
        result = cli_runner.invoke(cli, [*_run("--select", "deployable"), "--start", "-x"])
        assert result.exit_code == 0
        assert (repo_root / "apps" / "web" / "ran.txt").read_text() == "--start -x"
        assert not (repo_root / "libs" / "core" / "ran.txt").exists()

    def test_missing_task(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["each"])
        assert result.exit_code == 2
