"""What every service operation hands back to the CLI.

Services never raise for expected failures (cycles, unknown names, a task
exiting non-zero). They return a failed :class:`ServiceResult` whose
:class:`ServiceError` keeps the stable ``code`` of the
:class:`~monoctl.domain.errors.MonoctlError` it came from, and the CLI maps
``ok`` to the exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from monoctl.domain.errors import MonoctlError


class ServiceError(BaseModel):
    """Machine-readable failure: ``code`` is stable, ``message`` is for people."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: MonoctlError) -> ServiceError:
        return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))


class ServiceResult(BaseModel):
    """Outcome of one operation (``each``, ``order``, ``lint`` ...).

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation.
        data: Operation payload. A failed ``each`` still carries its
            progress and the resume command.
        warnings: Skipped descriptors and other non-fatal findings.
        error: Present exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @model_validator(mode="after")
    def _error_matches_ok(self) -> ServiceResult:
        if self.ok == (self.error is not None):
            raise ValueError("error must be set exactly when ok is False")
        return self
