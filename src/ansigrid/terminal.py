import os
import sys
from collections.abc import Mapping

from ansigrid.engine import Tier


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def detect_tier(environ: Mapping[str, str] | None = None) -> Tier:
    """Guess the best colour tier from the usual terminal environment variables."""
    if environ is None:
        environ = os.environ
    if "NO_COLOR" in environ:
        return Tier.TEXT
    if environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return Tier.TRUECOLOR
    term = environ.get("TERM", "")
    if "256color" in term:
        return Tier.XTERM256
    if term in ("", "dumb"):
        return Tier.TEXT
    return Tier.ANSI
