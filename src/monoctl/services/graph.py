"""GraphService — ordering and traversal queries over the dependency graph.

Uses ``self._workspace.graph`` (triggers discovery and graph construction
on first access). Every operation is read-only.
"""

from __future__ import annotations

from typing import Any

from monoctl.domain.errors import MonoctlError, NotFoundError
from monoctl.domain.project import normalize_name
from monoctl.services.base import BaseService
from monoctl.services.result import ServiceResult


class GraphService(BaseService):
    """Handles dependency graph queries."""

    def _items(self, names: list[str]) -> list[dict[str, Any]]:
        registry = self._workspace.registry
        return [
            {
                "name": name,
                "version": registry[name].version,
                "root": str(registry[name].root),
            }
            for name in names
        ]

    def _resolve(self, name: str | None) -> str:
        """Normalize *name*, or fall back to the current subproject."""
        if name is not None:
            return normalize_name(name)
        current = self._workspace.current_project
        if current is None:
            raise NotFoundError(
                "project", "", "No project given and not inside a subproject directory"
            )
        return current.name

    def order(self) -> ServiceResult:
        """Every subproject in dependency order."""
        try:
            names = list(self._workspace.graph.topological_order())
        except MonoctlError as exc:
            return self._failure("order", exc)
        return ServiceResult(
            ok=True,
            op="order",
            data={"count": len(names), "items": self._items(names)},
            warnings=list(self._workspace.warnings),
        )

    def subtree(self, name: str | None = None) -> ServiceResult:
        """*name* (default: current project) and everything it depends on, in order."""
        try:
            root = self._resolve(name)
            graph = self._workspace.graph
            members = graph.subtree_from(root)
            names = [n for n in graph.topological_order() if n in members]
        except MonoctlError as exc:
            return self._failure("subtree", exc)
        return ServiceResult(
            ok=True,
            op="subtree",
            data={"source": root, "count": len(names), "items": self._items(names)},
            warnings=list(self._workspace.warnings),
        )

    def dependents(self, name: str | None = None) -> ServiceResult:
        """Every subproject that transitively depends on *name*, in order."""
        try:
            target = self._resolve(name)
            graph = self._workspace.graph
            members = graph.dependents_of(target)
            names = [n for n in graph.topological_order() if n in members]
        except MonoctlError as exc:
            return self._failure("dependents", exc)
        return ServiceResult(
            ok=True,
            op="dependents",
            data={"source": target, "count": len(names), "items": self._items(names)},
            warnings=list(self._workspace.warnings),
        )

    def show(self, *, dot: bool = False) -> ServiceResult:
        """Node set and adjacency, optionally as Graphviz DOT text."""
        try:
            graph = self._workspace.graph
        except MonoctlError as exc:
            return self._failure("graph", exc)

        registry = self._workspace.registry
        data: dict[str, Any] = {
            "node_count": len(graph),
            "edge_count": sum(len(deps) for deps in graph.adjacency().values()),
            "nodes": {name: str(registry[name].root) for name in graph.nodes},
            "adjacency": graph.adjacency(),
        }
        if dot:
            data["dot"] = graph.to_dot(data["nodes"])
        return ServiceResult(
            ok=True, op="graph", data=data, warnings=list(self._workspace.warnings)
        )
