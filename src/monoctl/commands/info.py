"""Command: monorepo overview."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monoctl.commands._base import MonoCommand

if TYPE_CHECKING:
    from monoctl.commands._context import AppContext


@click.command(
    cls=MonoCommand,
    examples="""\
  monoctl info
  monoctl -v info
  monoctl --json info""",
)
@click.pass_obj
def info(app: AppContext) -> None:
    """Show the config file, project dirs, and discovered subprojects."""
    from monoctl.services.info import InfoService

    app.emit(InfoService(app.workspace).info())
