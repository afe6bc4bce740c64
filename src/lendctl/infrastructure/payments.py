"""Config-driven payment authority for the CLI.

Settlement itself happens elsewhere; this adapter only decides whether
a payment is approved, according to the ``[payment]`` config section.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from lendctl.config.models import PaymentConfig

log = structlog.get_logger(__name__)


class PolicyPaymentAuthority:
    """Approves payments that satisfy the configured policy.

    A payment is declined when payments are disabled, when *amount*
    exceeds ``max_amount``, or when *payer* is listed in
    ``declined_payers``.
    """

    def __init__(self, config: PaymentConfig) -> None:
        self._config = config

    def process_payment(self, amount: int, payer: str) -> bool:
        reason = self._decline_reason(amount, payer)
        if reason is not None:
            log.info("payment.declined", amount=amount, payer=payer, reason=reason)
            return False
        log.debug("payment.approved", amount=amount, payer=payer)
        return True

    def _decline_reason(self, amount: int, payer: str) -> str | None:
        cfg = self._config
        if not cfg.enabled:
            return "payments disabled"
        if cfg.max_amount is not None and amount > cfg.max_amount:
            return f"amount exceeds {cfg.max_amount}"
        if payer in cfg.declined_payers:
            return "payer declined"
        return None
