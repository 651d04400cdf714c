"""Domain layer — descriptors, selectors, conflict rules, and errors.

This layer depends only on stdlib, pydantic, and packaging.
It must never import from services, infrastructure, commands, or config.
"""
