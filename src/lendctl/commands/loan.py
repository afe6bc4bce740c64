"""Command group: loan lifecycle and queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lendctl.commands._base import LendGroup

if TYPE_CHECKING:
    from lendctl.commands._context import AppContext


def _parse_hex(ctx: click.Context, param: click.Parameter, value: str | None) -> bytes | None:
    if value is None:
        return None
    try:
        return bytes.fromhex(value)
    except ValueError as exc:
        raise click.BadParameter(f"not a hex string: {value!r}") from exc


@click.group(
    cls=LendGroup,
    examples="""\
  lendctl --caller ST1LIBRARY loan start 1 ST2BORROWER --duration 1440 --key secret --amount 500
  lendctl loan check 1 ST2BORROWER
  lendctl --caller ST1LIBRARY loan extend 1 ST2BORROWER --by 720
  lendctl --caller ST2BORROWER loan end 1 ST2BORROWER
  lendctl loan history 1 ST2BORROWER""",
)
def loan() -> None:
    """Start, check, extend, and end loans."""


@loan.command(
    caller_role="issuer",
    examples="""\
  lendctl --caller ST1LIBRARY loan start 1 ST2BORROWER --duration 1440 --key secret --amount 500
  lendctl --caller ST1LIBRARY loan start 7 ST2BORROWER -d 100 --key-hex 0a0b0c --amount 50""",
)
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.option("-d", "--duration", type=int, required=True, help="Loan window in heights.")
@click.option("--key", "key_text", default=None, help="Access key as UTF-8 text.")
@click.option(
    "--key-hex",
    "key_bytes",
    default=None,
    callback=_parse_hex,
    help="Access key as a hex string.",
)
@click.option("--amount", type=int, required=True, help="Payment for the loan.")
@click.pass_obj
def start(
    app: AppContext,
    resource_id: int,
    borrower: str,
    duration: int,
    key_text: str | None,
    key_bytes: bytes | None,
    amount: int,
) -> None:
    """Start a loan of RESOURCE_ID to BORROWER (issuer only)."""
    from lendctl.services.loans import LoanService

    if key_text is not None and key_bytes is None:
        access_key = key_text.encode("utf-8")
    elif key_bytes is not None and key_text is None:
        access_key = key_bytes
    else:
        raise click.UsageError("Pass exactly one of --key or --key-hex.")

    app.emit(
        LoanService(app.ledger).start_loan(
            resource_id,
            borrower,
            duration,
            access_key,
            amount,
            caller=app.caller,
        )
    )


@loan.command()
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.pass_obj
def check(app: AppContext, resource_id: int, borrower: str) -> None:
    """Return the access key while the loan window is open."""
    from lendctl.services.loans import LoanService

    app.emit(LoanService(app.ledger).check_access(resource_id, borrower))


@loan.command(caller_role="participant")
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.pass_obj
def end(app: AppContext, resource_id: int, borrower: str) -> None:
    """End a loan (issuer any time, anyone once the window has elapsed)."""
    from lendctl.services.loans import LoanService

    app.emit(LoanService(app.ledger).end_loan(resource_id, borrower, caller=app.caller))


@loan.command(caller_role="issuer")
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.option("--by", "additional", type=int, required=True, help="Heights to add.")
@click.pass_obj
def extend(app: AppContext, resource_id: int, borrower: str, additional: int) -> None:
    """Extend a loan once, charging the extension fee (issuer only)."""
    from lendctl.services.loans import LoanService

    app.emit(
        LoanService(app.ledger).extend_loan(
            resource_id,
            borrower,
            additional,
            caller=app.caller,
        )
    )


@loan.command()
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.pass_obj
def show(app: AppContext, resource_id: int, borrower: str) -> None:
    """Show a loan and its current status."""
    from lendctl.services.loans import LoanService

    app.emit(LoanService(app.ledger).get_loan(resource_id, borrower))


@loan.command()
@click.argument("resource_id", type=int)
@click.argument("borrower")
@click.pass_obj
def history(app: AppContext, resource_id: int, borrower: str) -> None:
    """Show the audit trail for a resource/borrower pair, newest first."""
    from lendctl.services.loans import LoanService

    app.emit(LoanService(app.ledger).get_history(resource_id, borrower))


@loan.command("list")
@click.option("--active-only", is_flag=True, help="Hide loans whose window has elapsed.")
@click.pass_obj
def list_cmd(app: AppContext, active_only: bool) -> None:
    """List current loans."""
    from lendctl.services.loans import LoanService

    app.emit(LoanService(app.ledger).list_loans(include_expired=not active_only))
