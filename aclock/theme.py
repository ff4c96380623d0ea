"""Colour themes for the clock face.

Each theme maps the face style roles (see aclock.face.ROLES) to a Rich style.
The Nord palettes come from https://www.nordtheme.com/.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Theme:
    name: str
    hour: str
    minute: str
    second: str
    face: str
    label: str

    def style_for(self, role: Optional[str]) -> str:
        """Rich style string for a cell role; background cells get none."""
        if role is None:
            return ""
        return getattr(self, role)

    def with_color(self, color: str) -> "Theme":
        """Same theme with every role painted in one colour."""
        return Theme(
            name=self.name,
            hour=color,
            minute=color,
            second=color,
            face=color,
            label=color,
        )


THEMES: dict[str, Theme] = {
    "nord-frost": Theme(
        name="nord-frost",
        hour="#5E81AC",
        minute="#81A1C1",
        second="#88C0D0",
        face="#8FBCBB",
        label="#8FBCBB",
    ),
    "nord-aurora": Theme(
        name="nord-aurora",
        hour="#BF616A",
        minute="#D08770",
        second="#EBCB8B",
        face="#B48EAD",
        label="#B48EAD",
    ),
    # Terminal default colours
    "mono": Theme(name="mono", hour="", minute="", second="", face="", label=""),
}

DEFAULT_THEME = "nord-frost"


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive). Raises KeyError if unknown."""
    key = str(name).lower().strip()
    if key not in THEMES:
        raise KeyError(name)
    return THEMES[key]
