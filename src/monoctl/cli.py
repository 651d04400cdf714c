"""The ``monoctl`` entry point: global flags, then one subcommand."""

from __future__ import annotations

import click

from monoctl import __version__
from monoctl.commands import register_commands
from monoctl.commands._base import MonoGroup
from monoctl.commands._context import AppContext
from monoctl.config.settings import MonoSettings

EXIT_STATUS = """\b
Exit status:
  0  success (lint conflicts too, unless --strict)
  1  a task failed, the graph is invalid, or a name is unknown
  2  usage error"""


@click.group(
    cls=MonoGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EXIT_STATUS,
    examples="""\
        monoctl each pytest -q
        monoctl --json graph order
        monoctl -c ../other/monoctl.toml info
        monoctl -q graph show --dot | dot -Tsvg > deps.svg""",
)
@click.version_option(version=__version__, prog_name="monoctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Names only; no progress, errors only in logs.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, including each task command.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Use this monoctl.toml instead of searching upward from the cwd.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Run tasks across a monorepo's subprojects in dependency order."""
    ctx.obj = AppContext(
        MonoSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
