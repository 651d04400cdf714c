"""Click base classes that carry an ``examples`` block.

``--help`` stays short; ``--examples`` prints ready-to-paste invocations
and exits before any argument is validated, so ``monoctl each --examples``
works without a TASK.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Installs an eager ``--examples`` flag when examples text is given."""

    examples: str | None = None

    def _install_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if not self.examples:
            return
        assert isinstance(self, click.Command)
        self.params.append(
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=self._show_examples,
                help="Show usage examples.",
            )
        )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)


class MonoCommand(_ExamplesMixin, click.Command):
    """A command accepting ``examples=...`` in its decorator."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)


class MonoGroup(_ExamplesMixin, click.Group):
    """A group whose subcommands default to :class:`MonoCommand`."""

    command_class = MonoCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._install_examples(examples)
