"""Subcommand modules for lendctl.

Provides register_commands() which uses deferred imports to keep
``lendctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from lendctl.commands.authority import authority
    from lendctl.commands.clock import clock
    from lendctl.commands.loan import loan
    from lendctl.commands.params import params
    from lendctl.commands.resource import resource

    cli.add_command(loan)
    cli.add_command(params)
    cli.add_command(authority)
    cli.add_command(resource)
    cli.add_command(clock)
