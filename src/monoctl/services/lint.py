"""LintService — advisory dependency version checks.

A conflict never makes the operation fail: the result is ``ok`` with the
conflicts listed in ``data``.
"""

from __future__ import annotations

from typing import Any

from monoctl.domain.conflicts import check_conflicts
from monoctl.services.base import BaseService
from monoctl.services.result import ServiceResult


class LintService(BaseService):
    """Reports dependencies declared at more than one version."""

    def check(self) -> ServiceResult:
        registry = self._workspace.registry
        report = check_conflicts(registry)
        conflicts: list[dict[str, Any]] = [
            {
                "dependency": name,
                "versions": entry.versions,
                "declared_by": entry.declared_by,
                "internal": name in registry,
            }
            for name, entry in report.items()
        ]
        return ServiceResult(
            ok=True,
            op="lint",
            data={
                "project_count": len(registry),
                "count": len(conflicts),
                "conflicts": conflicts,
            },
            warnings=list(self._workspace.warnings),
        )
