"""Log callables shared by the ledger.

Every component takes an optional ``log(level, message)`` callable instead
of reaching for a global logger.  Levels, lowest first:

    DEBUG  INFO  SUCCESS  WARNING  ERROR
"""
from __future__ import annotations

import sys
from datetime import datetime
from typing import Callable, TextIO

from src.core.constants import LOG_LEVELS, DEFAULT_LOG_LEVEL

LogFn = Callable[[str, str], None]   # (level, message)


def null_log(level: str, message: str) -> None:
    pass


def level_rank(level: str) -> int:
    """Position of ``level`` in LOG_LEVELS; unknown levels rank as INFO."""
    try:
        return LOG_LEVELS.index(level.upper())
    except ValueError:
        return LOG_LEVELS.index("INFO")


def format_entry(level: str, message: str, now: datetime | None = None) -> str:
    ts = (now or datetime.now()).strftime("%H:%M:%S.%f")[:-3]
    return f"[{ts}] [{level.upper():7}] {message}"


def make_stream_log(
    min_level: str = DEFAULT_LOG_LEVEL,
    stream:    TextIO | None = None,
) -> LogFn:
    """Return a LogFn writing timestamped lines at or above ``min_level``.

    ``stream`` defaults to whatever ``sys.stderr`` is at call time.
    """
    threshold = level_rank(min_level)

    def log(level: str, message: str) -> None:
        if level_rank(level) < threshold:
            return
        out = stream or sys.stderr
        out.write(format_entry(level, message) + "\n")

    return log
