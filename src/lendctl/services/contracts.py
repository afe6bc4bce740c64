"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions fail fast in tests.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class LoanData(BaseModel):
    """Payload for ``start_loan``, ``extend_loan`` and ``get_loan``."""

    model_config = ConfigDict(extra="forbid")

    loan_id: int
    resource_id: int
    borrower: str
    start_time: int
    duration: int
    expires_at: int
    access_key: str
    extended: bool
    amount_paid: int
    status: Literal["active", "extended", "expired"]


class AccessData(BaseModel):
    """Payload for ``check_access``."""

    resource_id: int
    borrower: str
    access_key: str
    expires_at: int
    height: int


class EndLoanData(BaseModel):
    """Payload for ``end_loan``."""

    resource_id: int
    borrower: str
    loan_id: int
    ended_at: int
    expired: bool


class HistoryEntryData(BaseModel):
    timestamp: int
    action: Literal["start-loan", "access-denied", "end-loan", "extend-loan"]
    success: bool


class HistoryResultData(BaseModel):
    """Payload for ``get_history``."""

    resource_id: int
    borrower: str
    count: int
    items: list[HistoryEntryData]


class LoanListResultData(BaseModel):
    """Payload for ``list_loans``."""

    height: int
    count: int
    items: list[LoanData]


class ParametersData(BaseModel):
    """Payload for ``get_parameters`` and the configuration setters."""

    issuer: str
    max_loan_duration: int
    extension_fee: int
    authority_contract: str | None
    loan_counter: int
