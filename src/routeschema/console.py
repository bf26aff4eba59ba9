"""Console output — colored, indent-aware status lines on stderr.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TextIO

INDENT = "  "


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color(stream: TextIO) -> bool:
    """Return True if *stream* is a terminal that supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


_RESET = "\033[0m"
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_RED = "\033[31m"


def pad_message(label: str, value: str, separator: str = "→", width: int = 24) -> str:
    """Align a ``label -> value`` pair so consecutive lines form columns.

    >>> pad_message("Params types", "params.ts", width=14)
    'Params types   → params.ts'

    """
    return f"{label.ljust(width)} {separator} {value}"


class Console:
    """Human-facing progress reporter.

    Args:
        stream: Where lines are written.  Defaults to ``sys.stderr`` at
            write time, so pytest's ``capsys`` sees the output.
        color: Force colors on or off.  *None* auto-detects from the stream.

    """

    __slots__ = ("_color", "_stream")

    def __init__(self, stream: TextIO | None = None, *, color: bool | None = None) -> None:
        self._stream = stream
        self._color = color

    def info(self, msg: str, *, event: str | None = None, indent: int = 0) -> None:
        prefix = f"{self._paint(f'[{event}]', _CYAN)} " if event else ""
        self._write(f"{INDENT * indent}{prefix}{msg}")

    def success(self, msg: str, *, indent: int = 0) -> None:
        self._write(f"{INDENT * indent}{self._paint('✓', _GREEN)} {msg}")

    def error(self, msg: str, *, indent: int = 0) -> None:
        self._write(f"{INDENT * indent}{self._paint('✗', _RED)} {self._paint(msg, _RED)}")

    def _paint(self, text: str, color: str) -> str:
        if not self._use_color():
            return text
        return f"{color}{text}{_RESET}"

    def _use_color(self) -> bool:
        if self._color is not None:
            return self._color
        return _supports_color(self._target())

    def _target(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _write(self, line: str) -> None:
        print(line, file=self._target())
