"""What every service operation hands back to its command handler.

Services never print and never exit; they return a :class:`ServiceResult`
and ``AppContext.emit`` decides what the user sees and the exit status.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a stable code plus a human message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    ``data["message"]`` and ``data["lines"]`` are rendered for humans; any
    other ``data`` keys are structured detail for callers and tests.
    ``error`` is set exactly when ``ok`` is False.  ``meta`` carries
    bookkeeping such as ``duration_ms``, shown only in verbose mode.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
