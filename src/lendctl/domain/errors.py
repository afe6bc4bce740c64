"""Numeric error taxonomy for registry operations.

Every failed operation carries exactly one of these codes. Codes are
stable: clients persist and compare them, so values never change.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Failure codes returned inside ``ServiceError.code``."""

    NOT_AUTHORIZED = 100
    LOAN_EXPIRED = 101
    RESOURCE_NOT_FOUND = 102
    LOAN_ALREADY_ACTIVE = 103
    INVALID_DURATION = 104
    INVALID_KEY = 105
    LOAN_NOT_FOUND = 106
    INVALID_FEE = 108
    INVALID_PAYMENT = 110
    PAYMENT_FAILED = 111
    ALREADY_EXTENDED = 114


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NOT_AUTHORIZED: "Caller is not authorized for this operation",
    ErrorCode.LOAN_EXPIRED: "Loan window has elapsed",
    ErrorCode.RESOURCE_NOT_FOUND: "Resource has no registered owner",
    ErrorCode.LOAN_ALREADY_ACTIVE: "A loan already exists for this resource and borrower",
    ErrorCode.INVALID_DURATION: "Duration must be positive and within the maximum loan duration",
    ErrorCode.INVALID_KEY: "Access key must not be empty",
    ErrorCode.LOAN_NOT_FOUND: "No loan exists for this resource and borrower",
    ErrorCode.INVALID_FEE: "Extension fee must not be negative",
    ErrorCode.INVALID_PAYMENT: "Amount paid must be positive",
    ErrorCode.PAYMENT_FAILED: "Payment was declined",
    ErrorCode.ALREADY_EXTENDED: "Loan has already been extended",
}


def error_message(code: ErrorCode) -> str:
    """Human-readable message for *code*."""
    return ERROR_MESSAGES.get(code, code.name.replace("_", " ").capitalize())
