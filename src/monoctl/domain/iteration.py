"""Iteration options, plans, and run outcomes.

These are plain data: :class:`~monoctl.services.iteration.IterationController`
builds and consumes them.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, Field


class IterationOptions(BaseModel):
    """Filters for one ``each`` run. Everything defaults to off/empty.

    Attributes:
        subtree: Restrict to the current project and its dependencies.
        select: Key of a configured selector; only matching projects run.
        skip: Project names removed after ordering.
        start: Resume point; projects ordered before it are dropped.
    """

    model_config = {"frozen": True}

    subtree: bool = False
    select: str | None = None
    skip: frozenset[str] = Field(default_factory=frozenset)
    start: str | None = None

    def to_args(self) -> list[str]:
        """The ``each`` flags that reproduce these options."""
        args: list[str] = []
        if self.subtree:
            args.append("--subtree")
        if self.select:
            args += ["--select", self.select]
        for name in sorted(self.skip):
            args += ["--skip", name]
        if self.start:
            args += ["--start", self.start]
        return args


@dataclass
class IterationPlan:
    """Ordered project names for one run plus a cursor.

    ``cursor`` is the index of the unit being (or about to be) visited; it
    stops on a failing or interrupted unit so the plan can still produce a
    resume point.
    """

    names: tuple[str, ...]
    options: IterationOptions
    cursor: int = 0

    def __len__(self) -> int:
        return len(self.names)

    @property
    def current(self) -> str | None:
        if self.cursor >= len(self.names):
            return None
        return self.names[self.cursor]

    def resume_options(self) -> IterationOptions:
        """Options that restart this run at the cursor."""
        return self.options.model_copy(update={"start": self.current})


class ResumeDirective(BaseModel):
    """How to restart a failed run at the unit that failed."""

    model_config = {"frozen": True}

    options: IterationOptions

    @property
    def start(self) -> str | None:
        return self.options.start

    def command_line(self, task: str, task_args: Sequence[str], *, prog: str = "monoctl") -> str:
        """The literal shell command that resumes the run."""
        return shlex.join([prog, "each", *self.options.to_args(), task, *task_args])


class RunResult(BaseModel):
    """Outcome of executing a plan."""

    model_config = {"frozen": True}

    total: int
    completed: list[str] = Field(default_factory=list)
    elapsed: float = 0.0
    failed: str | None = None
    position: int | None = None
    error: str | None = None
    resume: ResumeDirective | None = None

    @property
    def ok(self) -> bool:
        return self.failed is None
