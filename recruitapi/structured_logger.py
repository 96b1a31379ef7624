"""A structured logger that turns key/value arguments into attributes."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any, Callable

Attrs = list[tuple[str, Any]]
Writer = Callable[[int, str, Attrs], None]

_BAD_KEY = "!BAD_KEY"

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}


class StructuredLogger:
    """Logger that pairs up arguments as attributes and hands them to a writer."""

    def __init__(self, writer: Writer):
        self._writer = writer

    def log(self, message: str, level: int, *args: Any) -> None:
        """Log ``message`` with ``args`` read as alternating keys and values.

        Non-string keys are replaced by ``!BAD_KEY``; a trailing key with no
        value is dropped.
        """
        pairs = iter(args)
        attrs = [
            (key if isinstance(key, str) else _BAD_KEY, value)
            for key, value in zip(pairs, pairs)
        ]
        self._writer(level, message, attrs)


def _level_name(level: int) -> str:
    return _LEVEL_NAMES.get(level, logging.getLevelName(level))


def _write_json_line(level: int, message: str, attrs: Attrs) -> None:
    if level < logging.INFO:
        return
    entries = [
        ("time", datetime.now().astimezone().isoformat()),
        ("level", _level_name(level)),
        ("msg", message),
        *attrs,
    ]
    line = ",".join(f"{json.dumps(k)}:{json.dumps(v, default=str)}" for k, v in entries)
    sys.stdout.write("{" + line + "}\n")


def new_stdout_logger() -> StructuredLogger:
    """Return a logger writing one JSON object per line to standard output."""
    return StructuredLogger(_write_json_line)