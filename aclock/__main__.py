"""Allow `python -m aclock`."""

from .clock import app

if __name__ == "__main__":
    app(prog_name="aclock")
