"""Click base classes for lendctl commands.

LendCommand and LendGroup accept two extra keyword arguments:

- ``examples``: text printed by an eager ``--examples`` flag.
- ``caller_role`` (commands only): the identity the command must act
  as. It is appended to the help text and named in the usage error
  raised when no ``--caller`` was given.
"""

from __future__ import annotations

from typing import Any

import click

CALLER_ROLES: dict[str, str] = {
    "issuer": "the registry issuer",
    "authority": "the registry authority",
    "participant": "the issuer, or anyone once the loan window has elapsed",
}


def _examples_option(examples: str) -> click.Option:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )


def caller_role_of(ctx: click.Context) -> str | None:
    """Role declared by the command running in *ctx*, if any."""
    return getattr(ctx.command, "caller_role", None)


class LendCommand(click.Command):
    """Click Command with ``--examples`` and an optional caller role."""

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        caller_role: str | None = None,
        **kwargs: Any,
    ) -> None:
        if caller_role is not None:
            if caller_role not in CALLER_ROLES:
                msg = f"Unknown caller role: {caller_role!r}"
                raise ValueError(msg)
            note = f"Requires --caller: {CALLER_ROLES[caller_role]}."
            epilog = kwargs.get("epilog")
            kwargs["epilog"] = f"{epilog}\n\n{note}" if epilog else note
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.caller_role = caller_role
        if examples:
            self.params.append(_examples_option(examples))


class LendGroup(click.Group):
    """Click Group with ``--examples``; subcommands default to LendCommand."""

    command_class = LendCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))
