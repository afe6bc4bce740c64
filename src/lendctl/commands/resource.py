"""Command group: resource ownership (hosting environment)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import LendGroup

if TYPE_CHECKING:
    from lendctl.commands._context import AppContext


@click.group(
    cls=LendGroup,
    examples="""\
  lendctl resource register 1 ST1OWNER
  lendctl resource list""",
)
def resource() -> None:
    """Register owned resources that can be lent."""


@resource.command()
@click.argument("resource_id", type=int)
@click.argument("owner")
@click.pass_obj
def register(app: AppContext, resource_id: int, owner: str) -> None:
    """Record OWNER as the owner of RESOURCE_ID."""
    from lendctl.services.environment import EnvironmentService

    try:
        result = EnvironmentService(app.ledger).register_resource(resource_id, owner)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    app.emit(result)


@resource.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered resources and their owners."""
    from lendctl.services.environment import EnvironmentService

    app.emit(EnvironmentService(app.ledger).list_resources())
