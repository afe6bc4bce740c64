"""Command group: one-shot authority assignment."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import LendGroup

if TYPE_CHECKING:
    from lendctl.commands._context import AppContext


@click.group(
    cls=LendGroup,
    examples="""\
  lendctl authority set ST2AUTHORITY""",
)
def authority() -> None:
    """Assign the registry authority."""


@authority.command(
    "set",
    examples="""\
  lendctl authority set ST2AUTHORITY""",
)
@click.argument("identity")
@click.pass_obj
def set_authority(app: AppContext, identity: str) -> None:
    """Set the authority identity. Only the first assignment succeeds."""
    from lendctl.services.configuration import ConfigService

    app.emit(ConfigService(app.ledger).set_authority_contract(identity))
