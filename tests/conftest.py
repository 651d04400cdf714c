"""Shared pytest fixtures and test helpers for monoctl tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from monoctl.config.settings import MonoSettings
from monoctl.domain.project import Dependency, ProjectDescriptor, ProjectRegistry
from monoctl.infrastructure.workspace import Workspace

CONFIG_TOML = """\
[workspace]
project_dirs = ["libs", "apps"]

[selectors.deployable]
attribute = "tags"
values = ["deployable"]

[selectors.uses-core]
attribute = "dependencies"
values = ["core"]
"""

type WriteProject = Callable[..., Path]
type MakeRegistry = Callable[..., ProjectRegistry]


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's MONOCTL_* environment out of the tests."""
    monkeypatch.delenv("MONOCTL_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


def _render_pyproject(
    name: str,
    version: str,
    deps: list[str],
    tags: list[str],
) -> str:
    lines = [
        "[project]",
        f'name = "{name}"',
        f'version = "{version}"',
        "dependencies = [" + ", ".join(f'"{d}"' for d in deps) + "]",
    ]
    if tags:
        lines += ["", "[tool.monoctl]", "tags = [" + ", ".join(f'"{t}"' for t in tags) + "]"]
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_project() -> WriteProject:
    """Factory: write ``<parent>/<name>/pyproject.toml`` and return the project dir."""

    def _write(
        parent: Path,
        name: str,
        version: str = "1.0",
        deps: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> Path:
        project_dir = parent / name
        project_dir.mkdir(parents=True, exist_ok=True)
        (project_dir / "pyproject.toml").write_text(
            _render_pyproject(name, version, deps or [], tags or []), encoding="utf-8"
        )
        return project_dir

    return _write


@pytest.fixture
def repo_root(tmp_path: Path, write_project: WriteProject) -> Path:
    """Temporary monorepo with four subprojects.

    Layout (arrows are internal dependencies)::

        libs/core   1.0  requests==2.31
        libs/util   1.0  -> core==1.0, requests==2.28
        apps/web    2.0  -> util, core   [deployable]
        apps/api    0.5  -> core==0.9    [deployable]
    """
    (tmp_path / "monoctl.toml").write_text(CONFIG_TOML, encoding="utf-8")
    libs = tmp_path / "libs"
    apps = tmp_path / "apps"
    write_project(libs, "core", "1.0", ["requests==2.31"])
    write_project(libs, "util", "1.0", ["core==1.0", "requests==2.28"])
    write_project(apps, "web", "2.0", ["util", "core"], tags=["deployable"])
    write_project(apps, "api", "0.5", ["core==0.9"], tags=["deployable"])
    return tmp_path


@pytest.fixture
def workspace(repo_root: Path) -> Workspace:
    """Workspace over ``repo_root`` with the repo root as working directory."""
    settings = MonoSettings.from_cli(repo_root=repo_root)
    return Workspace(settings, cwd=repo_root)


@pytest.fixture
def _isolated_repo(repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp monorepo so the CLI discovers its monoctl.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_repo")`` on command test
    classes.
    """
    monkeypatch.chdir(repo_root)


@pytest.fixture
def make_registry(tmp_path: Path) -> MakeRegistry:
    """Factory: in-memory registry from ``{name: [dependency specs]}``.

    Versions default to ``1.0``; pass ``versions={"a": "2.0"}`` to override
    and ``tags={"a": ["x"]}`` to tag projects.
    """

    def _make(
        projects: dict[str, list[str]],
        *,
        versions: dict[str, str] | None = None,
        tags: dict[str, list[str]] | None = None,
    ) -> ProjectRegistry:
        versions = versions or {}
        tags = tags or {}
        return ProjectRegistry(
            ProjectDescriptor(
                name=name,
                version=versions.get(name, "1.0"),
                root=tmp_path / name,
                dependencies=tuple(Dependency.parse(spec) for spec in deps),
                tags=tuple(tags.get(name, [])),
            )
            for name, deps in projects.items()
        )

    return _make
