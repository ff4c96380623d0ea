"""Terminal session: alternate screen, hidden cursor, key input and drawing.

All process-wide terminal state is owned by TerminalSession and restored when
the `with` block exits, whichever way it exits (normal return, Ctrl+C,
SIGTERM, or an I/O error while drawing).
"""

from __future__ import annotations

import os
import select
import signal
import sys
import threading
import time
from itertools import groupby
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from .face import CharacterBuffer, TerminalDimensions
from .theme import Theme


def buffer_to_text(buffer: CharacterBuffer, theme: Theme, end: str = "") -> Text:
    """Convert a character buffer into a Rich Text, one line per buffer row.

    Consecutive cells sharing a role are emitted as one styled span. Frames for the
    live screen carry no trailing newline; printed frames should pass one.
    """
    text = Text(no_wrap=True, overflow="crop", end=end)
    for y, row in enumerate(buffer.rows):
        if y:
            text.append("\n")
        for role, cells in groupby(row, key=lambda c: c.role):
            text.append("".join(c.char for c in cells), style=theme.style_for(role))
    return text


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


class TerminalSession:
    """Context manager owning the full-screen clock display.

    Args:
        console: Rich console to draw on (a fresh one by default).
        keys: Switch stdin to cbreak mode so single key presses can be read.
            Ignored when stdin is not a POSIX terminal.
    """

    def __init__(self, console: Optional[Console] = None, keys: bool = True):
        self.console = console or Console()
        self.keys = keys
        self._live: Optional[Live] = None
        self._stdin_attrs = None
        self._previous_sigterm = None

    @staticmethod
    def keys_supported() -> bool:
        """Whether single key presses can be read from stdin."""
        return os.name == "posix" and sys.stdin is not None and sys.stdin.isatty()

    @property
    def size(self) -> TerminalDimensions:
        """Current terminal size in cells, queried fresh on every access."""
        width, height = self.console.size
        return TerminalDimensions(width=width, height=height)

    def __enter__(self) -> "TerminalSession":
        try:
            # Live(screen=True) switches to the alternate screen and hides the cursor
            self._live = Live(console=self.console, screen=True, auto_refresh=False)
            self._live.start()

            if self.keys and self.keys_supported():
                self._enable_cbreak()

            # SIGTERM takes the same clean exit path as Ctrl+C
            if threading.current_thread() is threading.main_thread():
                self._previous_sigterm = signal.signal(signal.SIGTERM, _raise_interrupt)
        except BaseException:
            self._restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._restore()
        return False

    def draw(self, buffer: CharacterBuffer, theme: Theme) -> None:
        """Replace the screen contents with `buffer`. May raise OSError."""
        if self._live is None:
            raise RuntimeError("TerminalSession is not active")
        self._live.update(buffer_to_text(buffer, theme), refresh=True)

    def read_key(self, timeout: float) -> Optional[str]:
        """Wait up to `timeout` seconds for a key press and return it.

        Without cbreak mode this is a plain sleep that always returns None.
        """
        if self._stdin_attrs is None:
            time.sleep(timeout)
            return None

        # Read the fd directly: sys.stdin's buffer would hide queued bytes from select
        fd = sys.stdin.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if ready:
            return os.read(fd, 1).decode(errors="ignore")
        return None

    def _enable_cbreak(self) -> None:
        import termios
        import tty

        fd = sys.stdin.fileno()
        self._stdin_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)

    def _restore(self) -> None:
        # Undo in reverse order of acquisition; each step runs even if an earlier one fails
        try:
            if self._previous_sigterm is not None:
                signal.signal(signal.SIGTERM, self._previous_sigterm)
                self._previous_sigterm = None
        finally:
            try:
                if self._stdin_attrs is not None:
                    import termios

                    termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._stdin_attrs)
                    self._stdin_attrs = None
            finally:
                if self._live is not None:
                    live, self._live = self._live, None
                    live.stop()
