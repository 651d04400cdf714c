"""Command: run a task in every subproject, in dependency order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monoctl.commands._base import MonoCommand
from monoctl.domain.iteration import IterationOptions
from monoctl.domain.project import normalize_name

if TYPE_CHECKING:
    from monoctl.commands._context import AppContext
    from monoctl.domain.project import ProjectDescriptor


@click.command(
    cls=MonoCommand,
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    examples="""\
  monoctl each pytest -q
  monoctl each --subtree make build
  monoctl each --select deployable --skip legacy-api ./deploy.sh
  monoctl each --start core-lib pytest -x
  monoctl each --dry-run --subtree true""",
)
@click.option("--subtree", is_flag=True, help="Only the current subproject and its dependencies.")
@click.option("--select", "select_key", default=None, help="Only subprojects matching a selector.")
@click.option("--skip", multiple=True, help="Leave out a subproject (repeatable).")
@click.option("--start", default=None, help="Resume the run at this subproject.")
@click.option("--dry-run", is_flag=True, help="Print the plan without running anything.")
@click.argument("task")
@click.argument("task_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def each(
    app: AppContext,
    subtree: bool,
    select_key: str | None,
    skip: tuple[str, ...],
    start: str | None,
    dry_run: bool,
    task: str,
    task_args: tuple[str, ...],
) -> None:
    """Run TASK with TASK_ARGS in each subproject, dependencies first.

    Stops at the first failure and prints the command that resumes from
    the failed subproject.
    """
    from monoctl.services.iteration import IterationService

    options = IterationOptions(
        subtree=subtree,
        select=select_key,
        skip=frozenset(normalize_name(name) for name in skip),
        start=normalize_name(start) if start else None,
    )
    svc = IterationService(app.workspace)

    if dry_run:
        app.emit(svc.plan(options))
        return

    def on_progress(position: int, total: int, descriptor: ProjectDescriptor) -> None:
        app.progress(f"[{position}/{total}] {descriptor.name} ({descriptor.root})")

    app.emit(svc.each(options, task, task_args, on_progress=on_progress))
