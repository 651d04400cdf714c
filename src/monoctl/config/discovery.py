"""Locate ``monoctl.toml``.

The nearest ``monoctl.toml`` at or above the working directory marks the
monorepo root, the way ``.git`` marks a git checkout. ``MONOCTL_CONFIG``
names a config file directly and disables the search.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

CONFIG_FILENAME = "monoctl.toml"
CONFIG_ENV_VAR = "MONOCTL_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    ``MONOCTL_CONFIG`` wins when set; a value naming a missing file means
    "no config" rather than falling back to the search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
