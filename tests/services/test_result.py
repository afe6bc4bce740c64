"""Tests for the ServiceResult / ServiceError contract."""

import json

import pytest
from pydantic import ValidationError

from lendctl.domain.errors import ErrorCode
from lendctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_started_loan_defaults(self) -> None:
        started = ServiceResult(ok=True, op="start_loan", data={"loan_id": 0})
        assert (started.ok, started.op, started.data) == (True, "start_loan", {"loan_id": 0})
        assert not started.warnings
        assert started.error is None and started.meta is None

    def test_refusal_names_its_code(self) -> None:
        refused = ServiceResult(
            ok=False,
            op="check_access",
            error=ServiceError(code=ErrorCode.LOAN_NOT_FOUND, message="No loan"),
        )
        assert refused.error is not None
        assert refused.error.code == 106
        assert refused.error.name == "LOAN_NOT_FOUND"

    def test_declined_payment_as_json(self) -> None:
        declined = ServiceResult(
            ok=False,
            op="start_loan",
            error=ServiceError(
                code=ErrorCode.PAYMENT_FAILED,
                message="Payment was declined",
                detail={"amount": 500},
            ),
            meta={"height": 3},
        )
        payload = json.loads(declined.model_dump_json())
        assert payload["ok"] is False
        assert payload["error"] == {
            "code": 111,
            "message": "Payment was declined",
            "detail": {"amount": 500},
        }
        assert payload["meta"] == {"height": 3}

    def test_cannot_flip_outcome(self) -> None:
        started = ServiceResult(ok=True, op="start_loan")
        with pytest.raises(ValidationError):
            started.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_numeric_code_becomes_enum(self) -> None:
        expired = ServiceError.model_validate({"code": 101, "message": "expired"})
        assert expired.code is ErrorCode.LOAN_EXPIRED

    def test_code_outside_table_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError.model_validate({"code": 999, "message": "?"})

    def test_detail_empty_by_default(self) -> None:
        assert ServiceError(code=ErrorCode.INVALID_KEY, message="bad").detail == {}
