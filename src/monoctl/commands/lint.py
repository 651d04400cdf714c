"""Command: dependency version conflict report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monoctl.commands._base import MonoCommand

if TYPE_CHECKING:
    from monoctl.commands._context import AppContext


@click.command(
    cls=MonoCommand,
    examples="""\
  monoctl lint
  monoctl --json lint
  monoctl lint --strict""",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 when conflicts are found.")
@click.pass_obj
def lint(app: AppContext, strict: bool) -> None:
    """Report dependencies declared at more than one version."""
    from monoctl.services.lint import LintService

    result = LintService(app.workspace).check()
    app.emit(result)
    if strict and result.data.get("count"):
        raise SystemExit(1)
