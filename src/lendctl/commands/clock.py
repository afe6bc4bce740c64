"""Command group: the height clock (hosting environment)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import LendGroup

if TYPE_CHECKING:
    from lendctl.commands._context import AppContext


@click.group(
    cls=LendGroup,
    examples="""\
  lendctl clock show
  lendctl clock advance 1441
  lendctl clock set 5000""",
)
def clock() -> None:
    """Show or move the current height."""


@clock.command()
@click.pass_obj
def show(app: AppContext) -> None:
    """Print the current height."""
    from lendctl.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.ledger).current_height())


@clock.command()
@click.argument("blocks", type=click.IntRange(min=0))
@click.pass_obj
def advance(app: AppContext, blocks: int) -> None:
    """Move the height forward by BLOCKS."""
    from lendctl.services.environment import EnvironmentService

    try:
        result = EnvironmentService(app.ledger).advance_clock(blocks)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    app.emit(result)


@clock.command("set")
@click.argument("height", type=click.IntRange(min=0))
@click.pass_obj
def set_height(app: AppContext, height: int) -> None:
    """Jump to HEIGHT. Heights never decrease."""
    from lendctl.services.environment import EnvironmentService

    try:
        result = EnvironmentService(app.ledger).set_clock(height)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    app.emit(result)
