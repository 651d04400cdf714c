"""InfoService: monorepo overview: config, project dirs, subprojects."""

from __future__ import annotations

from pathlib import Path

from monoctl.services.base import BaseService
from monoctl.services.result import ServiceResult


def _display_path(path: Path, root: Path) -> str:
    root = root.resolve()
    return str(path.relative_to(root)) if path.is_relative_to(root) else str(path)


class InfoService(BaseService):
    def info(self) -> ServiceResult:
        ws = self._workspace
        registry = ws.registry
        current = ws.current_project
        items = [
            {
                "name": d.name,
                "version": d.version,
                "root": _display_path(d.root, ws.root),
                "tags": list(d.tags),
                "internal_deps": sorted(d.dependency_names & set(registry)),
            }
            for d in registry.values()
        ]
        return ServiceResult(
            ok=True,
            op="info",
            data={
                "config_path": str(ws.settings.config_path) if ws.settings.config_path else None,
                "repo_root": str(ws.root),
                "project_dirs": ws.settings.workspace.project_dirs,
                "selectors": sorted(ws.settings.selectors),
                "current_project": current.name if current else None,
                "count": len(items),
                "items": items,
            },
            warnings=list(ws.warnings),
        )
