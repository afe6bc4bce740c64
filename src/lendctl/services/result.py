"""Return types shared by every lendctl service.

Service methods never raise for a refused operation. They return a
``ServiceResult`` whose ``error`` carries the numeric :class:`ErrorCode`.
Exceptions are left for storage faults and programming errors.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from lendctl.domain.errors import ErrorCode


class ServiceError(BaseModel):
    """Why an operation was refused, plus the values that decided it."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        """``"LOAN_EXPIRED"`` for code 101, and so on."""
        return self.code.name


class ServiceResult(BaseModel):
    """Outcome of one registry operation.

    Attributes:
        ok: False when the operation was refused.
        op: Operation name, used to pick a renderer (``"start_loan"``).
        data: Payload of a successful operation.
        warnings: Notes for the user that did not stop the operation.
        error: Set exactly when ``ok`` is False.
        meta: Context such as the height the answer was computed at.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
