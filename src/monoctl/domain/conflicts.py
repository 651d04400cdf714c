"""Dependency version conflict linting.

Advisory only: :func:`check_conflicts` never raises on a conflict and never
mutates the registry.
"""

from __future__ import annotations

from collections.abc import Mapping

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field

from monoctl.domain.project import ProjectDescriptor


class ConflictEntry(BaseModel):
    """Distinct versions declared for one dependency, and who declares each."""

    model_config = {"frozen": True}

    versions: list[str]
    declared_by: dict[str, list[str]] = Field(default_factory=dict)

    @property
    def projects(self) -> list[str]:
        """Every declaring project, sorted and deduplicated."""
        return sorted({p for names in self.declared_by.values() for p in names})


type ConflictReport = dict[str, ConflictEntry]


def _version_key(version: str) -> tuple[int, Version | str]:
    # PEP 440 versions sort numerically; specifier strings sort after them.
    try:
        return (0, Version(version))
    except InvalidVersion:
        return (1, version)


def _bucket_key(version: str) -> Version | str:
    # PEP 440-equal versions (1.0, 1.0.0) share a bucket.
    try:
        return Version(version)
    except InvalidVersion:
        return version


def check_conflicts(registry: Mapping[str, ProjectDescriptor]) -> ConflictReport:
    """Report every dependency declared at more than one distinct version.

    Scans the dependency list of every descriptor, internal and external
    alike. Versions equal under PEP 440 are one version; the first spelling
    seen (in project name order) is the one reported.

    For internal dependencies the target project's own version is tested
    against the declared requirement. When it does not satisfy it, the
    target's version is recorded too, declared by the target itself, so
    ``A`` pinning ``B==1.0`` while ``B`` is at ``2.0`` shows up as a conflict
    on ``B``. A range the target satisfies (``B>=1.0`` with ``B`` at ``1.5``)
    adds nothing.

    Unversioned declarations are not compared.
    """
    declared: dict[str, dict[Version | str, set[str]]] = {}
    labels: dict[str, dict[Version | str, str]] = {}

    def record(dep_name: str, version: str, project: str) -> None:
        key = _bucket_key(version)
        labels.setdefault(dep_name, {}).setdefault(key, version)
        declared.setdefault(dep_name, {}).setdefault(key, set()).add(project)

    for name, descriptor in registry.items():
        for dep in descriptor.dependencies:
            if dep.version is None:
                continue
            record(dep.name, dep.version, name)
            target = registry.get(dep.name)
            if target is not None and not dep.accepts(target.version):
                record(dep.name, target.version, target.name)

    report: ConflictReport = {}
    for dep_name in sorted(declared):
        by_key = declared[dep_name]
        if len(by_key) < 2:
            continue
        names = labels[dep_name]
        keys = sorted(by_key, key=lambda k: _version_key(names[k]))
        report[dep_name] = ConflictEntry(
            versions=[names[k] for k in keys],
            declared_by={names[k]: sorted(by_key[k]) for k in keys},
        )
    return report
