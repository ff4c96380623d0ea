"""Shared console output helpers for the aclock CLI.

Only use these outside the live clock screen; anything printed while the
alternate screen is active is lost when it is left.
"""

from __future__ import annotations

from typing import NoReturn

import typer


def warn(message: str) -> None:
    """Print a warning message."""
    typer.secho(f"[warn] {message}", fg=typer.colors.YELLOW, err=True)


def error(message: str, *, err: bool = True) -> None:
    """Print an error message."""
    typer.secho(f"[error] {message}", fg=typer.colors.RED, err=err)


def fatal(message: str, *, code: int = 1, err: bool = True) -> NoReturn:
    """Print an error message and terminate the command."""
    error(message, err=err)
    raise typer.Exit(code=code)
