"""BaseService — foundation for all lendctl services.

Every service receives a :class:`Ledger` at construction time. The
Ledger provides the registry aggregate, collaborators, and transactions.
Services own their transaction boundaries via ``self._ledger.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from lendctl.domain.errors import ErrorCode, error_message
from lendctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from lendctl.infrastructure.ledger import Ledger

log = structlog.get_logger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class LoanService(BaseService):
            def end_loan(self, ...) -> ServiceResult:
                with self._ledger.transaction() as txn:
                    ...
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def _fail(self, op: str, code: ErrorCode, **detail: Any) -> ServiceResult:
        """Build a failure result for *code* and log the rejection."""
        log.debug("operation.rejected", op=op, code=int(code), reason=code.name, **detail)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=error_message(code), detail=detail),
        )
