"""Subcommand modules for monoctl.

Provides register_commands() which uses deferred imports to keep
``monoctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from monoctl.commands.graph import graph

    cli.add_command(graph)

    # --- Standalone commands ---
    from monoctl.commands.each import each
    from monoctl.commands.info import info
    from monoctl.commands.lint import lint

    cli.add_command(info)
    cli.add_command(lint)
    cli.add_command(each)
