"""BaseService — abstract foundation for all monoctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the registry, the dependency graph, and the settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from monoctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from monoctl.domain.errors import MonoctlError
    from monoctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class GraphService(BaseService):
            def order(self) -> ServiceResult:
                try:
                    names = self._workspace.graph.topological_order()
                except MonoctlError as exc:
                    return self._failure("order", exc)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _failure(
        self,
        op: str,
        exc: MonoctlError,
        *,
        data: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Convert a typed error into a failed ServiceResult."""
        logger.debug("%s failed: %s", op, exc.message)
        return ServiceResult(
            ok=False,
            op=op,
            data=data or {},
            warnings=list(self._workspace.warnings),
            error=ServiceError.from_error(exc),
        )
