"""EnvironmentService — hosting-environment actions around the registry.

The registry only reads the clock and the ownership source. Moving the
height forward and registering owned resources belong to the host; this
service exposes those actions so the CLI can simulate a host.
"""

from __future__ import annotations

import structlog

from lendctl.domain.loans import fits_ledger
from lendctl.services.base import BaseService
from lendctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class EnvironmentService(BaseService):
    """Clock and resource ownership controls."""

    def current_height(self) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="clock",
            data={"height": self._ledger.clock.current_height()},
        )

    def advance_clock(self, blocks: int) -> ServiceResult:
        """Move the height forward by *blocks*.

        Raises:
            ValueError: If *blocks* is negative or the height would overflow.
        """
        height = self._ledger.clock.advance(blocks)
        log.debug("clock.advanced", blocks=blocks, height=height)
        return ServiceResult(ok=True, op="clock", data={"height": height})

    def set_clock(self, height: int) -> ServiceResult:
        """Jump to *height*.

        Raises:
            ValueError: If *height* is below the current height or too large.
        """
        new_height = self._ledger.clock.set(height)
        log.debug("clock.set", height=new_height)
        return ServiceResult(ok=True, op="clock", data={"height": new_height})

    def register_resource(self, resource_id: int, owner: str) -> ServiceResult:
        """Record *owner* for *resource_id* in the ownership source.

        Raises:
            ValueError: If *resource_id* cannot be stored in the ledger.
        """
        if not fits_ledger(resource_id):
            msg = f"Resource id {resource_id} is outside the ledger integer range"
            raise ValueError(msg)
        self._ledger.ownership.register(resource_id, owner)
        log.info("resource.registered", resource_id=resource_id, owner=owner)
        return ServiceResult(
            ok=True,
            op="register_resource",
            data={"resource_id": resource_id, "owner": owner},
        )

    def list_resources(self) -> ServiceResult:
        owners = self._ledger.ownership.list_resources()
        items = [{"resource_id": rid, "owner": owner} for rid, owner in owners.items()]
        return ServiceResult(
            ok=True,
            op="list_resources",
            data={"count": len(items), "items": items},
        )
