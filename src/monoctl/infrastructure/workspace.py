"""Workspace — the run context injected into every service.

Owns the settings, the discovered registry, and the dependency graph for
one invocation. Discovery and graph construction happen lazily on first
access so ``--help`` and ``--version`` never touch the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from monoctl.infrastructure.discovery import discover_projects
from monoctl.infrastructure.graph.engine import DependencyGraph

if TYPE_CHECKING:
    from monoctl.config.settings import MonoSettings
    from monoctl.domain.project import ProjectDescriptor, ProjectRegistry


class Workspace:
    """Registry, graph and settings for one monorepo invocation.

    Args:
        settings: Resolved CLI/env/TOML settings.
        cwd: Working directory used to find the current subproject
            (defaults to the process CWD).
        registry: Pre-built registry, bypassing discovery.
    """

    def __init__(
        self,
        settings: MonoSettings,
        *,
        cwd: Path | None = None,
        registry: ProjectRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.cwd = cwd or Path.cwd()
        self._registry = registry
        self._graph: DependencyGraph | None = None
        self.warnings: list[str] = []

    @property
    def root(self) -> Path:
        return self.settings.repo_root

    @property
    def registry(self) -> ProjectRegistry:
        """The discovered subprojects (scanned on first access)."""
        if self._registry is None:
            self._registry, self.warnings = discover_projects(
                self.root, self.settings.workspace
            )
        return self._registry

    @property
    def graph(self) -> DependencyGraph:
        """The dependency graph (built on first access).

        Raises:
            CycleError: The declared dependencies form a cycle.
        """
        if self._graph is None:
            self._graph = DependencyGraph.build(self.registry)
        return self._graph

    @property
    def current_project(self) -> ProjectDescriptor | None:
        """The subproject whose root contains the working directory."""
        return self.registry.project_at(self.cwd)
