"""Typed error taxonomy shared by every layer.

Each error carries a stable ``code`` that services copy into
:class:`~monoctl.services.result.ServiceError`, so the CLI and ``--json``
consumers never have to parse messages.
"""

from __future__ import annotations

from typing import Any


class MonoctlError(Exception):
    """Base class for all monoctl errors."""

    code: str = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class ConfigurationError(MonoctlError):
    """A discovered subproject has a missing or malformed descriptor."""

    code = "INVALID_DESCRIPTOR"


class GraphError(MonoctlError):
    """The dependency graph cannot be constructed."""


class CycleError(GraphError):
    """The dependency graph contains a cycle."""

    code = "CYCLE"

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(
            f"Dependency cycle detected: {' -> '.join([*cycle, cycle[0]])}",
            cycle=cycle,
        )
        self.cycle = cycle


class DanglingDependencyError(GraphError):
    """An edge points at a project that is not in the registry."""

    code = "DANGLING_EDGE"

    def __init__(self, source: str, target: str) -> None:
        super().__init__(
            f"Project '{source}' depends on unknown project '{target}'",
            source=source,
            target=target,
        )


class NotFoundError(MonoctlError):
    """A named project, selector, or start point does not exist."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, key: str, message: str | None = None) -> None:
        super().__init__(message or f"Unknown {kind} '{key}'", kind=kind, key=key)
        self.kind = kind
        self.key = key


class AbortError(MonoctlError):
    """The iteration plan is empty."""

    code = "NO_MATCH"


class TaskFailure(MonoctlError):
    """The task callback failed for one subproject."""

    code = "TASK_FAILED"

    def __init__(self, project: str, message: str, **detail: Any) -> None:
        super().__init__(message, project=project, **detail)
        self.project = project
