"""AppContext: per-invocation state handed to every command.

The root group builds it from the resolved settings and subcommands get
it through ``@click.pass_obj``. It opens the ledger on demand and turns
a ServiceResult into output and an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import CALLER_ROLES, caller_role_of
from lendctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from lendctl.config.settings import LendSettings
    from lendctl.infrastructure.ledger import Ledger
    from lendctl.services.result import ServiceResult


class AppContext:
    """Settings, logging and the ledger for one ``lendctl`` run.

    ``--help`` and ``--version`` never open the database.
    """

    def __init__(self, settings: LendSettings) -> None:
        self.settings = settings
        self._ledger: Ledger | None = None

        from lendctl.config.logging import bind_caller, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_caller(settings.caller)

    @property
    def ledger(self) -> Ledger:
        """The ledger instance (opened lazily on first access)."""
        if self._ledger is None:
            from lendctl.infrastructure.ledger import Ledger

            self._ledger = Ledger(self.settings)
        return self._ledger

    @property
    def caller(self) -> str:
        """Identity from ``--caller`` / ``LENDCTL_CALLER``.

        Raises:
            click.UsageError: If no caller identity was supplied.
        """
        if not self.settings.caller:
            role = caller_role_of(click.get_current_context())
            who = CALLER_ROLES.get(role or "", "a caller identity")
            msg = f"This command acts as {who}: pass --caller or set LENDCTL_CALLER."
            raise click.UsageError(msg)
        return self.settings.caller

    def close(self) -> None:
        """Release the ledger, if one was opened."""
        if self._ledger is not None:
            self._ledger.close()
            self._ledger = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 if the operation was refused.

        A success goes to stdout with its warnings on stderr (none in
        JSON mode, where they are part of the payload). A refusal goes
        to stderr.
        """
        mode = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        rendered = format_result(result, settings=mode)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)
        click.echo(rendered)
        if not mode.json_output:
            for note in result.warnings:
                click.echo(f"WARNING: {note}", err=True)
