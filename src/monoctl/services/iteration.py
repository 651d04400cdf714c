"""IterationController and IterationService — ordered, resumable task runs.

Planning composes the graph order with the run's filters in a fixed
precedence: subtree, then skip, then select, then start. Execution is
strictly sequential because later units may rely on artifacts produced by
earlier ones.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING

import structlog

from monoctl.domain.errors import AbortError, MonoctlError, NotFoundError
from monoctl.domain.iteration import IterationOptions, IterationPlan, ResumeDirective, RunResult
from monoctl.domain.selectors import resolve_selector
from monoctl.infrastructure.runner import ShellTask
from monoctl.services.base import BaseService
from monoctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from monoctl.domain.project import ProjectDescriptor
    from monoctl.domain.selectors import SelectorSpec
    from monoctl.infrastructure.graph.engine import DependencyGraph

log = structlog.get_logger(__name__)

type TaskCallback = Callable[[ProjectDescriptor, Sequence[str]], object]
type ProgressCallback = Callable[[int, int, ProjectDescriptor], None]


class IterationController:
    """Turns options into a plan and drives a task over it, one unit at a time."""

    def __init__(
        self,
        graph: DependencyGraph,
        registry: Mapping[str, ProjectDescriptor],
        selectors: Mapping[str, SelectorSpec],
    ) -> None:
        self._graph = graph
        self._registry = registry
        self._selectors = selectors

    def plan(self, options: IterationOptions, *, current: str | None = None) -> IterationPlan:
        """Build the ordered plan for *options*.

        Args:
            options: The run's filters.
            current: Name of the project the run was started from; required
                when ``options.subtree`` is set.

        Raises:
            NotFoundError: Unknown subtree root, selector key, or start name.
            AbortError: No project survives the filters.
        """
        names = list(self._graph.topological_order())

        if options.subtree:
            if current is None:
                raise NotFoundError(
                    "subtree root", "", "--subtree requires running inside a subproject directory"
                )
            subtree = self._graph.subtree_from(current)
            names = [n for n in names if n in subtree]

        if options.skip:
            unknown = options.skip - set(self._registry)
            if unknown:
                log.warning("skip.unknown", projects=sorted(unknown))
            names = [n for n in names if n not in options.skip]

        if options.select:
            selector = resolve_selector(options.select, self._selectors)
            names = [n for n in names if selector.evaluate(self._registry[n])]

        if options.start:
            if options.start not in names:
                raise NotFoundError(
                    "start project",
                    options.start,
                    f"Start project '{options.start}' is not among the selected subprojects",
                )
            names = names[names.index(options.start) :]

        if not names:
            raise AbortError("Zero subprojects matched the given filters")

        log.debug("plan.built", count=len(names), options=options.to_args())
        return IterationPlan(names=tuple(names), options=options)

    def execute(
        self,
        plan: IterationPlan,
        task: TaskCallback,
        task_args: Sequence[str] = (),
        *,
        on_progress: ProgressCallback | None = None,
    ) -> RunResult:
        """Run *task* for each unit of *plan* in order, stopping at the first failure.

        Any ``Exception`` raised by the task marks that unit as failed.
        ``KeyboardInterrupt`` propagates; the plan cursor is left on the
        interrupted unit.
        """
        total = len(plan)
        completed: list[str] = []
        started = time.perf_counter()

        while plan.current is not None:
            name = plan.current
            position = plan.cursor + 1
            descriptor = self._registry[name]
            if on_progress is not None:
                on_progress(position, total, descriptor)
            log.info("unit.start", project=name, position=position, total=total)

            try:
                task(descriptor, task_args)
            except Exception as exc:
                message = exc.message if isinstance(exc, MonoctlError) else str(exc)
                log.info("unit.failed", project=name, position=position, error=message)
                return RunResult(
                    total=total,
                    completed=completed,
                    elapsed=time.perf_counter() - started,
                    failed=name,
                    position=position,
                    error=message or type(exc).__name__,
                    resume=ResumeDirective(options=plan.resume_options()),
                )

            completed.append(name)
            plan.cursor += 1

        return RunResult(
            total=total,
            completed=completed,
            elapsed=time.perf_counter() - started,
        )


class IterationService(BaseService):
    """Plans and runs tasks across the workspace's subprojects."""

    def _controller(self) -> IterationController:
        ws = self._workspace
        return IterationController(ws.graph, ws.registry, ws.settings.selectors)

    def _current_name(self) -> str | None:
        current = self._workspace.current_project
        return current.name if current is not None else None

    def plan(self, options: IterationOptions) -> ServiceResult:
        """Resolve the plan without running anything."""
        try:
            plan = self._controller().plan(options, current=self._current_name())
        except MonoctlError as exc:
            return self._failure("each_plan", exc)

        registry = self._workspace.registry
        items = [
            {
                "position": i,
                "name": name,
                "version": registry[name].version,
                "root": str(registry[name].root),
            }
            for i, name in enumerate(plan.names, start=1)
        ]
        return ServiceResult(
            ok=True,
            op="each_plan",
            data={"count": len(items), "items": items},
            warnings=list(self._workspace.warnings),
        )

    def each(
        self,
        options: IterationOptions,
        task: str,
        task_args: Sequence[str] = (),
        *,
        runner: TaskCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ServiceResult:
        """Run *task* with *task_args* in every planned subproject.

        Args:
            options: The run's filters.
            task: Task name; with the default runner, the executable to run.
            task_args: Arguments passed to the task unchanged.
            runner: Task callback; defaults to :class:`ShellTask`.
            on_progress: Called before each unit with ``(position, total, descriptor)``.
        """
        try:
            controller = self._controller()
            plan = controller.plan(options, current=self._current_name())
        except MonoctlError as exc:
            return self._failure("each", exc)

        each_config = self._workspace.settings.each
        callback = runner or ShellTask(task, env_prefix=each_config.env_prefix)
        result = controller.execute(plan, callback, task_args, on_progress=on_progress)

        data = {
            "task": task,
            "total": result.total,
            "completed": result.completed,
            "elapsed": round(result.elapsed, 3),
        }
        warnings = list(self._workspace.warnings)

        if result.ok:
            data["count"] = len(result.completed)
            return ServiceResult(ok=True, op="each", data=data, warnings=warnings)

        assert result.resume is not None
        data.update(
            failed=result.failed,
            position=result.position,
            resume_start=result.resume.start,
            resume_command=result.resume.command_line(
                task, task_args, prog=each_config.prog_name
            ),
        )
        return ServiceResult(
            ok=False,
            op="each",
            data=data,
            warnings=warnings,
            error=ServiceError(
                code="TASK_FAILED",
                message=(
                    f"{result.failed} failed ({result.position}/{result.total}): {result.error}"
                ),
                detail={"project": result.failed, "position": result.position},
            ),
        )
