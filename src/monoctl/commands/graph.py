"""Command group: dependency graph queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monoctl.commands._base import MonoGroup
from monoctl.services.graph import GraphService

if TYPE_CHECKING:
    from monoctl.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  monoctl graph order
  monoctl graph subtree
  monoctl graph subtree app-web
  monoctl graph dependents core-lib
  monoctl graph show
  monoctl graph show --dot | dot -Tsvg > deps.svg"""


@click.group(cls=MonoGroup, examples=_GRAPH_EXAMPLES)
@click.pass_obj
def graph(app: AppContext) -> None:
    """Inspect the subproject dependency graph."""


@graph.command(
    examples="""\
  monoctl graph order
  monoctl -q graph order"""
)
@click.pass_obj
def order(app: AppContext) -> None:
    """List every subproject in dependency order."""
    app.emit(GraphService(app.workspace).order())


@graph.command(
    examples="""\
  monoctl graph subtree
  monoctl graph subtree app-web"""
)
@click.argument("project", required=False)
@click.pass_obj
def subtree(app: AppContext, project: str | None) -> None:
    """List PROJECT (default: current) and everything it depends on."""
    app.emit(GraphService(app.workspace).subtree(project))


@graph.command(
    examples="""\
  monoctl graph dependents core-lib
  monoctl --json graph dependents"""
)
@click.argument("project", required=False)
@click.pass_obj
def dependents(app: AppContext, project: str | None) -> None:
    """List every subproject that depends on PROJECT (default: current)."""
    app.emit(GraphService(app.workspace).dependents(project))


@graph.command(
    examples="""\
  monoctl graph show
  monoctl graph show --dot > deps.dot"""
)
@click.option("--dot", is_flag=True, help="Emit Graphviz DOT text.")
@click.pass_obj
def show(app: AppContext, dot: bool) -> None:
    """Print the adjacency of every subproject."""
    app.emit(GraphService(app.workspace).show(dot=dot))
