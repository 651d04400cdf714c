"""Subproject descriptors and the registry that holds them.

Names are normalized with :func:`packaging.utils.canonicalize_name` so that
``My_Lib`` declared as a dependency matches a subproject named ``my-lib``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import SpecifierSet
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field

from monoctl.domain.errors import ConfigurationError


def normalize_name(name: str) -> str:
    """Canonical form of a project or dependency name."""
    return canonicalize_name(name)


class Dependency(BaseModel):
    """One declared dependency: a name and an optional version.

    ``version`` is the pinned version for ``==`` requirements, the full
    specifier text for anything else (``>=1.0,<2``), or None when the
    requirement is unversioned. ``specifier`` keeps the parsed specifier
    set so a project version can be tested against it.
    """

    model_config = {"frozen": True}

    name: str
    version: str | None = None
    specifier: str = ""

    @classmethod
    def parse(cls, spec: str) -> Dependency:
        """Parse a PEP 508 requirement string.

        Examples:
            >>> Dependency.parse("Lib==1.0").version
            '1.0'
            >>> Dependency.parse("requests>=2,<3").version
            '<3,>=2'
        """
        try:
            req = Requirement(spec)
        except InvalidRequirement as exc:
            raise ConfigurationError(f"Invalid dependency {spec!r}: {exc}", spec=spec) from exc

        specs = list(req.specifier)
        if not specs:
            version = None
        elif len(specs) == 1 and specs[0].operator in ("==", "==="):
            version = specs[0].version
        else:
            version = str(req.specifier)
        return cls(name=normalize_name(req.name), version=version, specifier=str(req.specifier))

    def accepts(self, version: str) -> bool:
        """Whether *version* satisfies this requirement.

        Pre-releases count. A version that is not PEP 440 only satisfies an
        identical pin.
        """
        if self.version is None:
            return True
        try:
            candidate = Version(version)
            if self.specifier:
                return SpecifierSet(self.specifier).contains(candidate, prereleases=True)
            return candidate == Version(self.version)
        except InvalidVersion:
            return version == self.version


class ProjectDescriptor(BaseModel):
    """Immutable description of one subproject in the monorepo."""

    model_config = {"frozen": True}

    name: str
    version: str
    root: Path
    dependencies: tuple[Dependency, ...] = ()
    tags: tuple[str, ...] = Field(default=())

    @property
    def dependency_names(self) -> frozenset[str]:
        return frozenset(dep.name for dep in self.dependencies)


class ProjectRegistry(Mapping[str, ProjectDescriptor]):
    """Read-only mapping of project name to descriptor.

    Iteration is sorted by name so that every consumer sees the same order
    regardless of discovery order.
    """

    def __init__(self, descriptors: Iterable[ProjectDescriptor] = ()) -> None:
        projects: dict[str, ProjectDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in projects:
                msg = (
                    f"Duplicate project name '{descriptor.name}' "
                    f"({projects[descriptor.name].root} and {descriptor.root})"
                )
                raise ConfigurationError(msg, project=descriptor.name)
            projects[descriptor.name] = descriptor
        self._projects = dict(sorted(projects.items()))

    def __getitem__(self, name: str) -> ProjectDescriptor:
        return self._projects[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def __repr__(self) -> str:
        return f"ProjectRegistry({list(self._projects)!r})"

    def project_at(self, path: Path) -> ProjectDescriptor | None:
        """Return the project whose root contains *path*, if any.

        The deepest matching root wins so nested subprojects resolve to
        the innermost one.
        """
        target = path.resolve()
        best: ProjectDescriptor | None = None
        for descriptor in self._projects.values():
            root = descriptor.root.resolve()
            if target.is_relative_to(root) and (
                best is None or len(root.parts) > len(best.root.resolve().parts)
            ):
                best = descriptor
        return best
