"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lendctl.toml only contains
overrides. A fresh ledger needs only ``[registry] issuer``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from lendctl.domain.keys import is_assignable_identity
from lendctl.domain.loans import (
    DEFAULT_EXTENSION_FEE,
    DEFAULT_MAX_LOAN_DURATION,
    LEDGER_INT_MAX,
)

# --- lendctl.toml sections ---


class RegistryConfig(BaseModel):
    """[registry] section.

    Values seed a fresh ledger. Once the ledger exists, the stored
    parameters win and are amended only through the authority.
    """

    model_config = {"frozen": True}

    issuer: str = "ST1LIBRARY"
    max_loan_duration: int = Field(default=DEFAULT_MAX_LOAN_DURATION, gt=0, le=LEDGER_INT_MAX)
    extension_fee: int = Field(default=DEFAULT_EXTENSION_FEE, ge=0, le=LEDGER_INT_MAX)

    @field_validator("issuer")
    @classmethod
    def check_issuer(cls, value: str) -> str:
        if not is_assignable_identity(value):
            msg = "issuer must be a non-blank identity other than the burn identity"
            raise ValueError(msg)
        return value.strip()


class PaymentConfig(BaseModel):
    """[payment] section — policy for the built-in payment authority."""

    model_config = {"frozen": True}

    enabled: bool = True
    max_amount: int | None = None
    declined_payers: list[str] = Field(default_factory=list)
