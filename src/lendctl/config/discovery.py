"""Locate and parse ``lendctl.toml``.

The file is searched for from the working directory upward, the way git
finds ``.git/``. ``LENDCTL_CONFIG`` names a file directly and disables
the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "lendctl.toml"
CONFIG_ENV_VAR = "LENDCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Nearest ``lendctl.toml`` at or above *start* (default: cwd).

    When ``LENDCTL_CONFIG`` is set, its file is returned if it exists and
    no search happens.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory / CONFIG_FILENAME
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc

