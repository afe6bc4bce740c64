"""Console and theme used by the human renderers.

Every console writes into its own StringIO so rendering stays a pure
``ServiceResult -> str`` step. Output to a non-terminal carries no
colour codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LEND_THEME = Theme(
    {
        "lend.ok": "bold green",
        "lend.error": "bold red",
        "lend.warning": "bold yellow",
        "lend.op": "bold cyan",
        "lend.key": "dim",
        "lend.id": "bold blue",
        "lend.height": "magenta",
        "lend.status.active": "green",
        "lend.status.extended": "cyan",
        "lend.status.expired": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "active": "lend.status.active",
    "extended": "lend.status.extended",
    "expired": "lend.status.expired",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Fresh buffered Console with the lendctl theme.

    Args:
        no_color: Strip styles entirely.
        width: Line width; 120 when not given.
    """
    return Console(
        file=StringIO(),
        theme=LEND_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Everything printed so far on a console from create_console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a loan status; unknown statuses are unstyled."""
    return _STATUS_STYLES.get(status, "")
