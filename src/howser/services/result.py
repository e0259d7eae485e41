"""ServiceResult and ServiceError — what every service operation returns.

Conformance problems are data inside ``ServiceResult.data``; only fatal
errors (unreadable files, unparseable sources, corrupt trees) produce
``ok=False``.  The CLI maps ``ok`` onto the process exit code.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """A fatal error and its cause chain."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type of every service operation.

    Attributes:
        ok: False only when a fatal error aborted the operation.
        op: Operation name (``check``, ``validate``, ``pharmacy``).
        data: Problems and counts on success.
        warnings: Non-fatal notes about the run itself.
        error: The fatal error when ``ok`` is False.
        meta: Timing spans when debug telemetry is enabled.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
