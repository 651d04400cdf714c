"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, monoctl.toml only contains
overrides. A fresh monorepo needs only ``[workspace] project_dirs``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from monoctl.domain.selectors import SelectorSpec


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    project_dirs: list[str] = Field(default_factory=lambda: ["."])
    descriptor: str = "pyproject.toml"


class EachConfig(BaseModel):
    """[each] section."""

    model_config = {"frozen": True}

    env_prefix: str = "MONOCTL"
    prog_name: str = "monoctl"
