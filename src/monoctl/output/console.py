"""Rich Console factory and theme for monoctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MONO_THEME = Theme(
    {
        "mono.ok": "bold green",
        "mono.error": "bold red",
        "mono.warning": "bold yellow",
        "mono.op": "bold cyan",
        "mono.key": "dim",
        "mono.name": "bold blue",
        "mono.version": "magenta",
        "mono.path": "dim",
        "mono.command": "bold",
    }
)


def create_console(*, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Tables are laid out for *width* columns (default 120) whatever the real
    terminal size, so piped output is stable.
    """
    return Console(
        file=StringIO(),
        theme=MONO_THEME,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
