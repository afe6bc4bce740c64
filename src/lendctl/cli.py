"""The ``lendctl`` entry point: global flags, settings, and subcommands."""

from __future__ import annotations

import click
from pydantic import ValidationError

from lendctl import __version__
from lendctl.commands import register_commands
from lendctl.commands._context import AppContext
from lendctl.config.settings import LendSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lendctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the essential value.")
@click.option("-v", "--verbose", is_flag=True, help="Show error detail, meta, and debug logs.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this lendctl.toml instead of searching for one.",
)
@click.option(
    "--caller",
    envvar="LENDCTL_CALLER",
    default=None,
    help="Identity invoking the operation.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    caller: str | None,
) -> None:
    """Timed-access loan registry."""
    ctx.ensure_object(dict)
    try:
        settings = LendSettings.from_cli(
            config_path=config_path,
            json_output=json_output or None,
            quiet=quiet or None,
            verbose=verbose or None,
            log_json=log_json or None,
            caller=caller,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
