"""Subproject discovery: scan project dirs and parse descriptors.

Every immediate child of a configured project dir that holds a descriptor
file (``pyproject.toml`` by default) is a subproject. Directories without
one are ignored. A descriptor that exists but cannot be read is logged,
excluded from the registry, and reported back as a warning; discovery
carries on with the remaining subprojects.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from monoctl.domain.errors import ConfigurationError
from monoctl.domain.project import Dependency, ProjectDescriptor, ProjectRegistry, normalize_name

if TYPE_CHECKING:
    from monoctl.config.models import WorkspaceConfig

log = structlog.get_logger(__name__)

# Directories never treated as subprojects.
_SKIP_DIRS = frozenset({".git", ".venv", "venv", "node_modules", "__pycache__", "build", "dist"})


def read_descriptor(project_dir: Path, filename: str = "pyproject.toml") -> ProjectDescriptor:
    """Parse the descriptor file in *project_dir*.

    Reads ``[project] name``, ``version`` and ``dependencies`` (PEP 621)
    and the optional ``[tool.monoctl] tags`` list.

    Raises:
        ConfigurationError: If the file is unreadable, is not valid TOML,
            lacks a static name and version, or has malformed dependencies
            or tags.
    """
    path = project_dir / filename
    try:
        data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}", path=str(path)) from exc

    project = data.get("project")
    if not isinstance(project, dict):
        raise ConfigurationError(f"{path} has no [project] table", path=str(path))

    name = project.get("name")
    version = project.get("version")
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f"{path} does not declare a project name", path=str(path))
    if not isinstance(version, str) or not version:
        raise ConfigurationError(
            f"{path} does not declare a static version for '{name}'", path=str(path)
        )

    raw_deps = project.get("dependencies", [])
    if not isinstance(raw_deps, list) or not all(isinstance(spec, str) for spec in raw_deps):
        raise ConfigurationError(
            f"{path}: [project] dependencies must be a list of strings", path=str(path)
        )

    return ProjectDescriptor(
        name=normalize_name(name),
        version=version,
        root=project_dir,
        dependencies=tuple(Dependency.parse(spec) for spec in raw_deps),
        tags=_read_tags(data, path),
    )


def _read_tags(data: dict[str, Any], path: Path) -> tuple[str, ...]:
    """``[tool.monoctl] tags``, validated as a list of strings."""
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigurationError(f"{path}: [tool] must be a table", path=str(path))
    section = tool.get("monoctl", {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"{path}: [tool.monoctl] must be a table", path=str(path))
    tags = section.get("tags", [])
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise ConfigurationError(
            f"{path}: [tool.monoctl] tags must be a list of strings", path=str(path)
        )
    return tuple(tags)


def find_project_dirs(repo_root: Path, workspace: WorkspaceConfig) -> list[Path]:
    """List candidate subproject directories in sorted order."""
    found: list[Path] = []
    for entry in workspace.project_dirs:
        base = (repo_root / entry).resolve()
        if not base.is_dir():
            log.warning("project_dir.missing", path=str(base))
            continue
        for child in sorted(base.iterdir()):
            if not child.is_dir() or child.name.startswith(".") or child.name in _SKIP_DIRS:
                continue
            if (child / workspace.descriptor).is_file():
                found.append(child)
    return found


def discover_projects(
    repo_root: Path, workspace: WorkspaceConfig
) -> tuple[ProjectRegistry, list[str]]:
    """Build the registry for the monorepo rooted at *repo_root*.

    Returns ``(registry, warnings)``. Each warning describes one excluded
    subproject.
    """
    warnings: list[str] = []
    descriptors: dict[str, ProjectDescriptor] = {}

    for project_dir in find_project_dirs(repo_root, workspace):
        try:
            descriptor = read_descriptor(project_dir, workspace.descriptor)
        except ConfigurationError as exc:
            log.warning("descriptor.invalid", path=str(project_dir), error=exc.message)
            warnings.append(exc.message)
            continue

        existing = descriptors.get(descriptor.name)
        if existing is not None:
            msg = (
                f"Duplicate project name '{descriptor.name}' in {project_dir}; "
                f"keeping {existing.root}"
            )
            log.warning("descriptor.duplicate", name=descriptor.name, path=str(project_dir))
            warnings.append(msg)
            continue
        descriptors[descriptor.name] = descriptor

    log.debug("discovery.complete", projects=len(descriptors), excluded=len(warnings))
    return ProjectRegistry(descriptors.values()), warnings
