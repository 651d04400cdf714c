"""monoctl: dependency-ordered task runner for monorepos."""

__version__ = "0.3.0"
