"""CLI: Full-screen analog clock rendered with Rich.

- Uses Rich Live on the alternate screen, redrawn once per tick.
- The dial is fitted to the terminal window and recomputed every tick, so
  resizing the window just works.

Key bindings while running:
    q       quit
    -       shrink the dial
    = / +   grow the dial
"""

from __future__ import annotations

import time
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style

from ._cli_common import new_typer_app, parse_clock_spec
from ._cli_output import fatal, warn
from .face import (
    CELL_ASPECT,
    ClockTime,
    FaceOptions,
    HandLengths,
    TerminalDimensions,
    render_face,
)
from .terminal import TerminalSession, buffer_to_text
from .theme import DEFAULT_THEME, THEMES, Theme, get_theme


# User can access help message with shortcut -h
app = new_typer_app()
console = Console()     # For getting console size

# Dial scale bounds and step for the -/+ keys
SCALE_MIN = 0.1
SCALE_MAX = 1.0
SCALE_STEP = 0.1

_DEFAULT_LENGTHS = HandLengths()


# Options shared by the live clock and the snapshot command
THEME_OPTION = typer.Option(DEFAULT_THEME, "--theme", envvar="ACLOCK_THEME", help="Colour theme: " + "|".join(THEMES))
COLOR_OPTION = typer.Option(None, "-c", "--color", help="Paint everything in one colour (Rich style, e.g., cyan, #00ffcc)")
HIDE_SECOND_OPTION = typer.Option(False, "--hide-second-hand", help="Hide the second hand")
HIDE_HOUR_LABELS_OPTION = typer.Option(False, "--hide-hour-labels", help="Hide the 12 hour ticks")
SHOW_MINUTE_LABELS_OPTION = typer.Option(False, "--show-minute-labels", help="Show the 60 minute ticks")
ROUND_OPTION = typer.Option(False, "--round", help="Keep the dial circular using --cell-aspect (the default dial fills the window, uncorrected)")
CELL_ASPECT_OPTION = typer.Option(CELL_ASPECT, "--cell-aspect", min=0.1, help="Character cell height/width ratio; only applied with --round")
HOUR_LENGTH_OPTION = typer.Option(_DEFAULT_LENGTHS.hour, "--hour-length", help="Hour hand length as a fraction of the radius")
MINUTE_LENGTH_OPTION = typer.Option(_DEFAULT_LENGTHS.minute, "--minute-length", help="Minute hand length as a fraction of the radius")
SECOND_LENGTH_OPTION = typer.Option(_DEFAULT_LENGTHS.second, "--second-length", help="Second hand length as a fraction of the radius")


# Callback that runs the live clock only when no subcommand is provided
@app.callback(invoke_without_command=True)
def clock(
    ctx: typer.Context,
    theme: str = THEME_OPTION,
    color: Optional[str] = COLOR_OPTION,
    tick: int = typer.Option(1000, "--tick", envvar="ACLOCK_TICK", min=10, help="Redraw interval in milliseconds"),
    hide_second_hand: bool = HIDE_SECOND_OPTION,
    hide_hour_labels: bool = HIDE_HOUR_LABELS_OPTION,
    show_minute_labels: bool = SHOW_MINUTE_LABELS_OPTION,
    round_dial: bool = ROUND_OPTION,
    cell_aspect: float = CELL_ASPECT_OPTION,
    hour_length: float = HOUR_LENGTH_OPTION,
    minute_length: float = MINUTE_LENGTH_OPTION,
    second_length: float = SECOND_LENGTH_OPTION,
):
    """Run a full-screen analog clock until interrupted (q or Ctrl+C)."""
    # If a subcommand (snapshot) is invoked, do nothing here.
    if ctx.invoked_subcommand:
        return

    palette = _resolve_theme(theme, color)
    options = _face_options(
        hide_second_hand, hide_hour_labels, show_minute_labels,
        round_dial, cell_aspect, hour_length, minute_length, second_length,
    )

    if not TerminalSession.keys_supported():
        warn("stdin is not a terminal; key bindings are disabled (use Ctrl+C to quit)")

    try:
        with TerminalSession(console=console) as session:
            try:
                run_loop(session, palette, options, interval=tick / 1000)
            except KeyboardInterrupt:
                pass
    except OSError as exc:
        # Terminal went away; the session has already tried to restore it
        fatal(f"Terminal I/O failed: {exc}")


@app.command("snapshot")
def snapshot(
    at: Optional[str] = typer.Option(None, "--at", help="Time to draw as HH:MM or HH:MM:SS (default: now)"),
    width: Optional[int] = typer.Option(None, "-W", "--width", min=0, help="Frame width in cells (default: terminal width)"),
    height: Optional[int] = typer.Option(None, "-H", "--height", min=0, help="Frame height in cells (default: terminal height)"),
    theme: str = THEME_OPTION,
    color: Optional[str] = COLOR_OPTION,
    hide_second_hand: bool = HIDE_SECOND_OPTION,
    hide_hour_labels: bool = HIDE_HOUR_LABELS_OPTION,
    show_minute_labels: bool = SHOW_MINUTE_LABELS_OPTION,
    round_dial: bool = ROUND_OPTION,
    cell_aspect: float = CELL_ASPECT_OPTION,
    hour_length: float = HOUR_LENGTH_OPTION,
    minute_length: float = MINUTE_LENGTH_OPTION,
    second_length: float = SECOND_LENGTH_OPTION,
):
    """Print a single clock frame and exit."""
    palette = _resolve_theme(theme, color)
    options = _face_options(
        hide_second_hand, hide_hour_labels, show_minute_labels,
        round_dial, cell_aspect, hour_length, minute_length, second_length,
    )

    if at:
        t = ClockTime(*parse_clock_spec(at))
    else:
        t = ClockTime.from_datetime(datetime.now())

    size = console.size
    dims = TerminalDimensions(
        width=size.width if width is None else width,
        height=size.height if height is None else height,
    )

    frame = render_face(t, dims, options)
    console.print(buffer_to_text(frame, palette, end="\n"), soft_wrap=True)


def run_loop(
    session,
    theme: Theme,
    options: FaceOptions,
    interval: float,
    now: Callable[[], datetime] = datetime.now,
    clock_time: Callable[[], float] = time.time,
) -> None:
    """Draw a frame, wait for the next tick or a key press, repeat.

    Returns when the user presses `q`. Ctrl+C and I/O errors propagate.

    Args:
        session: Anything with `size`, `draw(buffer, theme)` and `read_key(timeout)`.
        interval: Seconds between redraws. Below one second the second hand
            sweeps smoothly instead of jumping.
    """
    smooth = interval < 1
    scale = options.scale

    while True:
        # Get current timestamp and window size; both may change between ticks
        t = ClockTime.from_datetime(now(), smooth=smooth)
        frame = render_face(t, session.size, replace(options, scale=scale))
        session.draw(frame, theme)

        # Tick on interval boundaries (aligns whole-second ticks to :00 milliseconds)
        key = session.read_key(interval - (clock_time() % interval))
        if key == "q":
            return
        scale = adjust_scale(scale, key)


def adjust_scale(scale: float, key: Optional[str]) -> float:
    """Apply a -/+ key press to the dial scale, clamped to [SCALE_MIN, SCALE_MAX]."""
    if key == "-":
        scale -= SCALE_STEP
    elif key in ("+", "="):
        scale += SCALE_STEP
    return round(min(SCALE_MAX, max(SCALE_MIN, scale)), 2)


def _resolve_theme(name: str, color: Optional[str]) -> Theme:
    try:
        palette = get_theme(name)
    except KeyError:
        raise typer.BadParameter(
            f"Unknown theme '{name}'. Choose from: " + ", ".join(THEMES.keys()),
            param_hint="'--theme'",
        )

    if color:
        try:
            Style.parse(color)
        except StyleSyntaxError as exc:
            raise typer.BadParameter(str(exc), param_hint="'--color'")
        palette = palette.with_color(color)
    return palette


def _face_options(
    hide_second_hand: bool,
    hide_hour_labels: bool,
    show_minute_labels: bool,
    round_dial: bool,
    cell_aspect: float,
    hour_length: float,
    minute_length: float,
    second_length: float,
) -> FaceOptions:
    lengths = HandLengths(hour=hour_length, minute=minute_length, second=second_length)
    try:
        lengths.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc))

    return FaceOptions(
        show_second_hand=not hide_second_hand,
        show_hour_labels=not hide_hour_labels,
        show_minute_labels=show_minute_labels,
        lengths=lengths,
        shape="round" if round_dial else "fill",
        cell_aspect=cell_aspect,
    )


# Entry point for manual execution: `python -m aclock.clock`
if __name__ == '__main__':
    app()
