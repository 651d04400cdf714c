"""Selector engine — named, configured predicates over descriptors.

Selectors are declared in ``monoctl.toml`` as attribute-membership tests::

    [selectors.deployable]
    attribute = "tags"
    values = ["deployable"]

The engine only applies the configured test. It has no built-in selectors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

from monoctl.domain.errors import NotFoundError
from monoctl.domain.project import ProjectDescriptor, normalize_name


class SelectorSpec(BaseModel):
    """[selectors.<key>] section."""

    model_config = {"frozen": True}

    attribute: Literal["name", "version", "tags", "dependencies", "root"] = "tags"
    values: tuple[str, ...] = Field(default=())
    match: Literal["any", "all"] = "any"


class Selector:
    """A resolved selector: ``evaluate(descriptor) -> bool``. No side effects."""

    def __init__(self, key: str, spec: SelectorSpec) -> None:
        self.key = key
        self.spec = spec

    def __repr__(self) -> str:
        return f"Selector({self.key!r}, {self.spec!r})"

    def __call__(self, descriptor: ProjectDescriptor) -> bool:
        return self.evaluate(descriptor)

    def evaluate(self, descriptor: ProjectDescriptor) -> bool:
        wanted = set(self.spec.values)
        attr = self.spec.attribute

        if attr in ("tags", "dependencies"):
            if attr == "tags":
                present = set(descriptor.tags)
            else:
                present = set(descriptor.dependency_names)
                wanted = {normalize_name(v) for v in wanted}
            if self.spec.match == "all":
                return wanted <= present
            return bool(wanted & present)

        # Scalar attributes: equality against any configured value.
        if attr == "name":
            wanted = {normalize_name(v) for v in wanted}
        value = str(getattr(descriptor, attr))
        return value in wanted


def resolve_selector(key: str, selectors: Mapping[str, SelectorSpec]) -> Selector:
    """Look up selector *key* in configuration.

    Raises:
        NotFoundError: If no selector named *key* is configured.
    """
    spec = selectors.get(key)
    if spec is None:
        known = ", ".join(sorted(selectors)) or "none configured"
        raise NotFoundError("selector", key, f"Unknown selector '{key}' (known: {known})")
    return Selector(key, spec)
