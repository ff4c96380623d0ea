"""Shared CLI helpers for the aclock commands."""

from __future__ import annotations

import re
from typing import Any

import typer

HELP_OPTION_NAMES = ("-h", "--help")


def new_typer_app(**kwargs: Any) -> typer.Typer:
    """Create a Typer app with consistent help flag shortcuts."""
    context_settings = dict(kwargs.pop("context_settings", {}) or {})
    context_settings.setdefault("help_option_names", list(HELP_OPTION_NAMES))
    return typer.Typer(context_settings=context_settings, **kwargs)


def parse_clock_spec(spec: str) -> tuple[int, int, int]:
    """Parse a wall-clock time into (hour, minute, second).

    Rules:
    - Two integers: hours minutes
    - Three integers: hours minutes seconds
    - Accepts any non-digit separators (spaces, ':', ',', '/')
    """
    parts = re.findall(r"\d+", spec or "")
    if len(parts) not in (2, 3):
        raise typer.BadParameter("Time must be HH:MM or HH:MM:SS (e.g., 03:00 | 14:25:30)")

    nums = list(map(int, parts))
    h, m = nums[0], nums[1]
    s = nums[2] if len(nums) == 3 else 0

    if not (0 <= h <= 23 and 0 <= m <= 59 and 0 <= s <= 59):
        raise typer.BadParameter(f"Time out of range: {spec!r}")
    return h, m, s
