"""ShellTask: the task callback that runs a command inside a subproject.

The command inherits the caller's environment, stdin, stdout and stderr,
so build tool output streams straight to the terminal.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from monoctl.domain.errors import TaskFailure

if TYPE_CHECKING:
    from monoctl.domain.project import ProjectDescriptor

log = structlog.get_logger(__name__)


class ShellTask:
    """Run ``task *task_args`` with the subproject root as working directory.

    Exports ``{prefix}_PROJECT`` and ``{prefix}_PROJECT_ROOT`` so the task
    can tell which unit it is running for.
    """

    def __init__(self, task: str, *, env_prefix: str = "MONOCTL") -> None:
        self.task = task
        self.env_prefix = env_prefix

    def __repr__(self) -> str:
        return f"ShellTask({self.task!r})"

    def environment(self, descriptor: ProjectDescriptor) -> dict[str, str]:
        env = dict(os.environ)
        env[f"{self.env_prefix}_PROJECT"] = descriptor.name
        env[f"{self.env_prefix}_PROJECT_ROOT"] = str(descriptor.root)
        return env

    def __call__(self, descriptor: ProjectDescriptor, task_args: Sequence[str]) -> None:
        """Run the task to completion.

        Raises:
            TaskFailure: The command could not be started or exited non-zero.
        """
        argv = [self.task, *task_args]
        log.debug("task.run", project=descriptor.name, argv=argv, cwd=str(descriptor.root))
        try:
            completed = subprocess.run(
                argv,
                cwd=descriptor.root,
                env=self.environment(descriptor),
                check=False,
            )
        except OSError as exc:
            msg = f"Could not run '{self.task}' in {descriptor.name}: {exc}"
            raise TaskFailure(descriptor.name, msg) from exc

        if completed.returncode != 0:
            msg = f"'{self.task}' exited with status {completed.returncode} in {descriptor.name}"
            raise TaskFailure(descriptor.name, msg, returncode=completed.returncode)
