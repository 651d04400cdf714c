"""Tests for Workspace — lazy registry, graph, and current project."""

from __future__ import annotations

from pathlib import Path

from monoctl.config.settings import MonoSettings
from monoctl.infrastructure.workspace import Workspace


class TestWorkspace:
    def test_registry_discovered_lazily(self, workspace: Workspace) -> None:
        assert workspace._registry is None
        assert list(workspace.registry) == ["api", "core", "util", "web"]

    def test_graph_built_from_registry(self, workspace: Workspace) -> None:
        assert workspace.graph.topological_order() == ("core", "api", "util", "web")
        assert workspace.graph is workspace.graph

    def test_root_from_settings(self, workspace: Workspace, repo_root: Path) -> None:
        assert workspace.root == repo_root

    def test_current_project_from_cwd(self, repo_root: Path) -> None:
        settings = MonoSettings.from_cli(repo_root=repo_root)
        ws = Workspace(settings, cwd=repo_root / "apps" / "web")
        current = ws.current_project
        assert current is not None
        assert current.name == "web"

    def test_no_current_project_at_root(self, workspace: Workspace) -> None:
        assert workspace.current_project is None

    def test_prebuilt_registry(self, make_registry, tmp_path: Path) -> None:
        registry = make_registry({"a": ["b"], "b": []})
        ws = Workspace(MonoSettings.from_cli(repo_root=tmp_path), registry=registry)
        assert ws.registry is registry
        assert ws.graph.topological_order() == ("b", "a")

    def test_warnings_collected(self, repo_root: Path) -> None:
        broken = repo_root / "libs" / "broken"
        broken.mkdir()
        (broken / "pyproject.toml").write_text("[project]\n", encoding="utf-8")
        ws = Workspace(MonoSettings.from_cli(repo_root=repo_root), cwd=repo_root)
        assert "broken" not in ws.registry
        assert len(ws.warnings) == 1
