"""aclock: an analog clock for the terminal."""

from __future__ import annotations

from .face import (
    CharacterBuffer,
    ClockTime,
    DialGeometry,
    FaceOptions,
    HandAngles,
    HandLengths,
    TerminalDimensions,
    dial_geometry,
    hand_angles,
    render_face,
)
from .theme import THEMES, Theme, get_theme

__version__ = "0.1.0"

__all__ = [
    "CharacterBuffer",
    "ClockTime",
    "DialGeometry",
    "FaceOptions",
    "HandAngles",
    "HandLengths",
    "TerminalDimensions",
    "dial_geometry",
    "hand_angles",
    "render_face",
    "THEMES",
    "Theme",
    "get_theme",
]
