#!/usr/bin/env python3
"""aclock CLI entry point.

Runs the analog clock app from the aclock/ package using Typer.

Examples:
    py cli.py                              # full-screen analog clock
    py cli.py --theme nord-aurora          # other colour theme
    py cli.py --tick 100                   # smooth second hand
    py cli.py --round --show-minute-labels # circular dial with minute ticks
    py cli.py snapshot --at 03:00 -W 40 -H 20
"""

from aclock.clock import app


if __name__ == '__main__':
    # Delegate to Typer's CLI runner
    app()
