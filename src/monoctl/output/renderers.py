"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from monoctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from monoctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Lists render as one project name per line. A failed ``each`` renders
    only its resume command so it can be piped straight back into a shell,
    and DOT text renders unchanged so it can be piped into Graphviz.
    """
    if not result.ok:
        resume = result.data.get("resume_command")
        if resume:
            return str(resume)
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if "dot" in result.data:
        return str(result.data["dot"])

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))
    if result.op == "lint":
        return "\n".join(c["dependency"] for c in result.data.get("conflicts", []))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="mono.ok")
    op = Text(f"  {result.op}", style="mono.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="mono.key")
    if key in ("name", "source", "current_project", "failed", "resume_start"):
        v = Text(str(value), style="mono.name")
    elif key.endswith("path") or key.endswith("root"):
        v = Text(str(value), style="mono.path")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _project_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table of subprojects in the given order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="mono.name", no_wrap=True)
    table.add_column("Version", style="mono.version")
    if verbose:
        table.add_column("Root", style="mono.path")

    for index, item in enumerate(items, start=1):
        row = [
            str(item.get("position", index)),
            str(item.get("name", "")),
            str(item.get("version", "")),
        ]
        if verbose:
            row.append(str(item.get("root", "")))
        table.add_row(*row)
    return table


def _format_elapsed(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(seconds, 60)
    return f"{int(minutes)}m {secs:.1f}s"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="mono.error")
    op = Text(f"  {result.op}", style="mono.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    d = result.data
    if "completed" in d:
        console.print(f"  completed {len(d['completed'])}/{d.get('total', 0)} before the failure")
    if "resume_command" in d:
        console.print()
        console.print(Text("  Resume with:", style="mono.key"))
        console.print(Text(f"    {d['resume_command']}", style="mono.command"), soft_wrap=True)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Iteration renderers ───────────────────────────────────────────────


def _render_each(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a successful ``each`` run summary."""
    d = result.data
    _status_line(console, result)
    _field(console, "task", d.get("task", ""))
    console.print(
        f"  ran in {d.get('count', 0)} subprojects in {_format_elapsed(d.get('elapsed', 0.0))}"
    )
    if verbose:
        for name in d.get("completed", []):
            console.print(f"    [mono.name]{name}[/mono.name]")


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render an ordered list of subprojects (plan, order, subtree, dependents)."""
    items = result.data.get("items", [])
    source = result.data.get("source")
    if source:
        console.print(f"{result.op} of [mono.name]{source}[/mono.name]")
    console.print(_project_table(items, verbose=verbose or result.op == "each_plan"))
    console.print(f"\n{result.data.get('count', len(items))} subprojects")


# ── Graph renderer ────────────────────────────────────────────────────


def _render_graph(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if "dot" in d:
        console.print(d["dot"], markup=False, soft_wrap=True)
        return

    adjacency: dict[str, list[str]] = d.get("adjacency", {})
    for name, deps in adjacency.items():
        line = Text(name, style="mono.name")
        if deps:
            line.append(" -> ")
            line.append(", ".join(deps))
        console.print(line)
    console.print(f"\n{d.get('node_count', 0)} subprojects, {d.get('edge_count', 0)} edges")


# ── Lint renderer ─────────────────────────────────────────────────────


def _render_lint(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the conflict report as dependency / version / declared-by rows."""
    conflicts = result.data.get("conflicts", [])
    if not conflicts:
        console.print(
            "[mono.ok]OK[/mono.ok]  No dependency version conflicts in "
            f"{result.data.get('project_count', 0)} subprojects."
        )
        return

    table = Table(show_header=True, show_lines=True, pad_edge=False, expand=False)
    table.add_column("Dependency", style="mono.name", no_wrap=True)
    table.add_column("Version", style="mono.version")
    table.add_column("Declared by")

    for conflict in conflicts:
        dependency = str(conflict["dependency"])
        if conflict.get("internal"):
            dependency += " (internal)"
        for index, version in enumerate(conflict["versions"]):
            declared = ", ".join(conflict["declared_by"].get(version, []))
            table.add_row(dependency if index == 0 else "", version, declared)

    console.print(table)
    console.print(f"\n[mono.warning]{len(conflicts)} conflicting dependencies[/mono.warning]")


# ── Info renderer ─────────────────────────────────────────────────────


def _render_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("config_path", "repo_root", "current_project"):
        if d.get(key):
            _field(console, key, d[key])
    _field(console, "project_dirs", ", ".join(d.get("project_dirs", [])))
    if d.get("selectors"):
        _field(console, "selectors", ", ".join(d["selectors"]))
    _field(console, "count", d.get("count", 0))

    items = d.get("items", [])
    if items:
        console.print()
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Name", style="mono.name", no_wrap=True)
        table.add_column("Version", style="mono.version")
        table.add_column("Root", style="mono.path")
        if verbose:
            table.add_column("Tags")
            table.add_column("Internal deps")
        for item in items:
            row = [str(item["name"]), str(item["version"]), str(item["root"])]
            if verbose:
                row.append(", ".join(item.get("tags", [])))
                row.append(", ".join(item.get("internal_deps", [])))
            table.add_row(*row)
        console.print(table)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "each": _render_each,
    "each_plan": _render_plan,
    "order": _render_plan,
    "subtree": _render_plan,
    "dependents": _render_plan,
    "graph": _render_graph,
    "lint": _render_lint,
    "info": _render_info,
}
