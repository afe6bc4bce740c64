"""ConfigService — registry parameters and the one-shot authority.

The authority is assigned once and can never be reassigned. After that,
only the authority itself may amend the loan duration cap and the
extension fee. Value checks run before the authority check, so an
invalid value reports its own error code even for an unauthorized caller.
"""

from __future__ import annotations

import structlog

from lendctl.domain.errors import ErrorCode
from lendctl.domain.keys import is_assignable_identity
from lendctl.domain.loans import fits_ledger
from lendctl.services.base import BaseService
from lendctl.services.contracts import ParametersData, dump_validated
from lendctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class ConfigService(BaseService):
    """Reads and amends :class:`RegistryParameters`."""

    def get_parameters(self) -> ServiceResult:
        params = self._ledger.state.parameters
        return ServiceResult(
            ok=True,
            op="get_parameters",
            data=dump_validated(ParametersData, params.model_dump()),
        )

    def set_authority_contract(self, identity: str) -> ServiceResult:
        """Assign the authority identity. Succeeds at most once."""
        op = "set_authority_contract"
        with self._ledger.transaction() as txn:
            if txn.parameters.has_authority or not is_assignable_identity(identity):
                return self._fail(op, ErrorCode.NOT_AUTHORIZED, identity=identity)
            params = txn.update_parameters(authority_contract=identity)

        log.info("params.updated", field="authority_contract", value=identity)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ParametersData, params.model_dump()),
        )

    def set_max_loan_duration(self, value: int, *, caller: str | None) -> ServiceResult:
        """Set the upper bound on loan and extension durations."""
        op = "set_max_loan_duration"
        if value <= 0 or not fits_ledger(value):
            return self._fail(op, ErrorCode.INVALID_DURATION, value=value)
        return self._amend(op, caller, max_loan_duration=value)

    def set_extension_fee(self, value: int, *, caller: str | None) -> ServiceResult:
        """Set the fee charged for a loan extension."""
        op = "set_extension_fee"
        if value < 0 or not fits_ledger(value):
            return self._fail(op, ErrorCode.INVALID_FEE, value=value)
        return self._amend(op, caller, extension_fee=value)

    def _amend(self, op: str, caller: str | None, **changes: int) -> ServiceResult:
        with self._ledger.transaction() as txn:
            params = txn.parameters
            if not params.has_authority or caller != params.authority_contract:
                return self._fail(op, ErrorCode.NOT_AUTHORIZED, caller=caller)
            params = txn.update_parameters(**changes)

        for field_name, value in changes.items():
            log.info("params.updated", field=field_name, value=value, caller=caller)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ParametersData, params.model_dump()),
        )
