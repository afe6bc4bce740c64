"""Human-readable rendering of ServiceResult, one renderer per operation.

``render_result`` looks up ``result.op`` in ``_OP_RENDERERS``; ops
without an entry print their data as ``key: value`` lines. Renderers
draw on a StringIO-backed Console and the text is taken back with
``get_output``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lendctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from lendctl.services.result import ServiceResult


# ── Entry points ──────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Text for *result*; *verbose* adds error detail and meta lines.

    The console writes to a buffer, not a terminal, so the text carries
    no ANSI codes.
    """
    console = create_console()
    if not result.ok:
        _render_error(result, console, verbose=verbose)
    else:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Prints the one value a script would pipe onward.
    """
    if not result.ok:
        err = result.error
        code = int(err.code) if err else 0
        return f"ERROR {code}"

    data = result.data
    if result.op == "check_access":
        return str(data.get("access_key", ""))
    if result.op == "start_loan":
        return str(data.get("loan_id", ""))
    if result.op == "clock":
        return str(data.get("height", ""))
    items = data.get("items")
    if isinstance(items, list) and result.op == "list_loans":
        return "\n".join(f"{i['resource_id']} {i['borrower']}" for i in items)
    return f"OK: {result.op}"


# ── Shared pieces ─────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """``OK  <op>`` header."""
    console.print(Text.assemble(("OK", "lend.ok"), "  ", (result.op, "lend.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """One ``key: value`` line, styled by what the key holds."""
    if key == "loan_id" or key.endswith("_id"):
        v = Text(str(value), style="lend.id")
    elif key in ("height", "expires_at", "start_time", "ended_at"):
        v = Text(str(value), style="lend.height")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(Text.assemble((f"  {key}: ", "lend.key"), v))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Meta lines under a blank line, if the result has any."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


# ── Refusals ──────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    line = Text.assemble(("ERROR", "lend.error"), "  ", (result.op, "lend.op"))
    if err is None:
        line.append(" - Unknown error")
        console.print(line)
        return
    line.append(f" [{int(err.code)} {err.code.name}]", style="lend.error")
    line.append(f" - {err.message}")
    console.print(line)

    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Loan renderers ────────────────────────────────────────────────────


def _render_loan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single loan as a panel (start, extend, show)."""
    d = result.data
    if result.op != "get_loan":
        _status_line(console, result)

    status = str(d.get("status", ""))
    body = Text("status: ")
    body.append(status, style=style_for_status(status))
    body.append(
        f"\nstart: {d.get('start_time')}  duration: {d.get('duration')}"
        f"  expires at: {d.get('expires_at')}"
    )
    body.append(f"\namount paid: {d.get('amount_paid')}")
    body.append(f"\nextended: {'yes' if d.get('extended') else 'no'}")
    if verbose:
        body.append(f"\naccess key: {d.get('access_key')}")

    title = f"loan {d.get('loan_id', '?')}: {d.get('resource_id')} / {d.get('borrower')}"
    console.print(Panel(body, title=title, border_style="dim", expand=False))
    if verbose:
        _render_meta(console, result)


def _render_access(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("resource_id", "borrower", "access_key", "expires_at", "height"):
        if key in result.data:
            _field(console, key, result.data[key])


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render end_loan, register_resource, and other small payloads."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_loan_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Loan", style="lend.id", justify="right")
    table.add_column("Resource", justify="right")
    table.add_column("Borrower")
    table.add_column("Status")
    table.add_column("Start", style="lend.height", justify="right")
    table.add_column("Expires", style="lend.height", justify="right")
    table.add_column("Paid", justify="right")
    if verbose:
        table.add_column("Key", style="dim")

    for item in items:
        status = str(item.get("status", ""))
        row: list[Any] = [
            str(item.get("loan_id", "")),
            str(item.get("resource_id", "")),
            str(item.get("borrower", "")),
            Text(status, style=style_for_status(status)),
            str(item.get("start_time", "")),
            str(item.get("expires_at", "")),
            str(item.get("amount_paid", "")),
        ]
        if verbose:
            row.append(str(item.get("access_key", "")))
        table.add_row(*row)

    console.print(table)
    count = result.data.get("count", len(items))
    console.print(f"\n{count} loans at height {result.data.get('height')}")


def _render_history(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    items = d.get("items", [])
    header = Text("History for resource ")
    header.append(str(d.get("resource_id")), style="lend.id")
    header.append(f" / {d.get('borrower')}")
    console.print(header)
    if not items:
        console.print("No history recorded.")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Height", style="lend.height", justify="right")
    table.add_column("Action")
    table.add_column("Result")
    for item in items:
        success = bool(item.get("success"))
        outcome = Text("ok", style="lend.ok") if success else Text("failed", style="lend.error")
        table.add_row(str(item.get("timestamp", "")), str(item.get("action", "")), outcome)
    console.print(table)


# ── Registry renderers ────────────────────────────────────────────────


def _render_params(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.op != "get_parameters":
        _status_line(console, result)
    d = result.data
    authority = d.get("authority_contract") or "(not set)"
    _field(console, "issuer", d.get("issuer"))
    _field(console, "authority", authority)
    _field(console, "max_loan_duration", d.get("max_loan_duration"))
    _field(console, "extension_fee", d.get("extension_fee"))
    _field(console, "loans_started", d.get("loan_counter"))


def _render_clock(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    height = str(result.data.get("height"))
    console.print(Text.assemble(("height ", "lend.key"), (height, "lend.height")))


def _render_resources(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    if not items:
        console.print("No resources registered.")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Resource", style="lend.id", justify="right")
    table.add_column("Owner")
    for item in items:
        table.add_row(str(item.get("resource_id", "")), str(item.get("owner", "")))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_mutation(result, console, verbose=verbose)


_OP_RENDERERS: dict[str, Any] = {
    # Lifecycle
    "start_loan": _render_loan,
    "extend_loan": _render_loan,
    "check_access": _render_access,
    "end_loan": _render_mutation,
    # Queries
    "get_loan": _render_loan,
    "get_history": _render_history,
    "list_loans": _render_loan_table,
    # Parameters
    "get_parameters": _render_params,
    "set_authority_contract": _render_params,
    "set_max_loan_duration": _render_params,
    "set_extension_fee": _render_params,
    # Environment
    "clock": _render_clock,
    "register_resource": _render_mutation,
    "list_resources": _render_resources,
}
