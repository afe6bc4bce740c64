"""Command group: registry parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import LendGroup

if TYPE_CHECKING:
    from lendctl.commands._context import AppContext


@click.group(
    cls=LendGroup,
    examples="""\
  lendctl params show
  lendctl --caller ST2AUTHORITY params set-max-duration 20000
  lendctl --caller ST2AUTHORITY params set-extension-fee 250""",
)
def params() -> None:
    """Show or amend registry parameters."""


@params.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """Show issuer, authority, duration cap, and extension fee."""
    from lendctl.services.configuration import ConfigService

    app.emit(ConfigService(app.ledger).get_parameters())


@params.command("set-max-duration", caller_role="authority")
@click.argument("value", type=int)
@click.pass_obj
def set_max_duration(app: AppContext, value: int) -> None:
    """Set the maximum loan duration (authority only)."""
    from lendctl.services.configuration import ConfigService

    app.emit(ConfigService(app.ledger).set_max_loan_duration(value, caller=app.caller))


@params.command("set-extension-fee", caller_role="authority")
@click.argument("value", type=int)
@click.pass_obj
def set_extension_fee(app: AppContext, value: int) -> None:
    """Set the extension fee (authority only)."""
    from lendctl.services.configuration import ConfigService

    app.emit(ConfigService(app.ledger).set_extension_fee(value, caller=app.caller))
