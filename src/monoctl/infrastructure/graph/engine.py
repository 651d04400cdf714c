"""DependencyGraph — NetworkX DiGraph over the internal subprojects.

Rebuilt per invocation from the registry, never cached across runs.
Edges point from a project to each internal project it depends on;
external dependencies stay on the descriptor and never become edges.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

import networkx as nx

from monoctl.domain.errors import CycleError, DanglingDependencyError, NotFoundError

if TYPE_CHECKING:
    from monoctl.domain.project import ProjectDescriptor

type _Graph = nx.DiGraph


class DependencyGraph:
    """Read-only dependency graph, validated at construction.

    Raises:
        DanglingDependencyError: An edge targets a name outside the node set.
        CycleError: The edges form a cycle.
    """

    def __init__(self, nodes: Iterable[str], adjacency: Mapping[str, Iterable[str]]) -> None:
        g: _Graph = nx.DiGraph()
        g.add_nodes_from(sorted(nodes))
        for source in sorted(adjacency):
            if source not in g:
                raise NotFoundError("project", source)
            for target in sorted(adjacency[source]):
                if target not in g:
                    raise DanglingDependencyError(source, target)
                g.add_edge(source, target)
        self._graph = g
        self._check_acyclic()

    @classmethod
    def build(cls, registry: Mapping[str, ProjectDescriptor]) -> DependencyGraph:
        """Build the graph by intersecting declared dependencies with the registry."""
        names = set(registry)
        adjacency = {
            name: descriptor.dependency_names & names for name, descriptor in registry.items()
        }
        return cls(names, adjacency)

    def _check_acyclic(self) -> None:
        try:
            edges = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return
        raise CycleError([source for source, _target in edges])

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[str, ...]:
        return tuple(sorted(self._graph.nodes))

    def __contains__(self, name: object) -> bool:
        return name in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def adjacency(self) -> dict[str, list[str]]:
        """Direct dependencies of every node, sorted for stable output."""
        return {node: sorted(self._graph.successors(node)) for node in self.nodes}

    def dependencies_of(self, name: str) -> frozenset[str]:
        """Direct internal dependencies of *name*."""
        self._require(name)
        return frozenset(self._graph.successors(name))

    def _require(self, name: str) -> None:
        if name not in self._graph:
            raise NotFoundError("project", name)

    # ------------------------------------------------------------------
    # Ordering and traversal
    # ------------------------------------------------------------------

    def topological_order(self) -> tuple[str, ...]:
        """Dependencies before dependents, ties broken by ascending name.

        Lexicographic Kahn ordering on the reversed graph, so the same
        registry always yields the same order. Construction already
        rejected cycles, so this cannot fail.
        """
        return tuple(nx.lexicographical_topological_sort(self._graph.reverse(copy=False)))

    def subtree_from(self, name: str) -> frozenset[str]:
        """*name* plus everything it transitively depends on."""
        self._require(name)
        return frozenset({name} | nx.descendants(self._graph, name))

    def dependents_of(self, name: str) -> frozenset[str]:
        """Every project that transitively depends on *name* (excluding itself)."""
        self._require(name)
        return frozenset(nx.ancestors(self._graph, name))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_dot(self, roots: Mapping[str, str] | None = None) -> str:
        """Render the graph as Graphviz DOT text.

        *roots* optionally maps project names to their root paths, which
        become node tooltips.
        """
        lines = ["digraph dependencies {", "  rankdir=LR;"]
        for node in self.nodes:
            attrs = f' [tooltip="{roots[node]}"]' if roots and node in roots else ""
            lines.append(f'  "{node}"{attrs};')
        for source, targets in self.adjacency().items():
            for target in targets:
                lines.append(f'  "{source}" -> "{target}";')
        lines.append("}")
        return "\n".join(lines)
