"""ServiceResult and ServiceError — the contract between services and callers.

INVARIANT: Service methods return ServiceResult; they do not raise for
problems with caller input.  The CLI consumes this type.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNKNOWN_BUILDER = "UNKNOWN_BUILDER"
    UNKNOWN_FIELD = "UNKNOWN_FIELD"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"build_report"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls,
        op: str,
        data: dict[str, Any],
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
