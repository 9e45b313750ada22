"""
Package logger for promptline.

All modules log through children of the ``promptline`` logger, which only
carries a ``NullHandler`` until an application opts in with
:func:`setup_logging`.  Prompts redraw the terminal in place, so records
written to the same terminal get overdrawn; a log file is usually the
better target while a prompt is on screen.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE = "promptline"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_package_logger = logging.getLogger(PACKAGE)
_package_logger.addHandler(logging.NullHandler())


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Route promptline records to a file, a stream, or both.

    Replaces any handlers installed by an earlier call.  Without *file*
    records go to *stream* (stderr by default); with *file* a stream
    handler is only added when *stream* is given explicitly.

    Args:
        level: Level name (``"DEBUG"``, ``"warning"``...) or number
        format: ``logging.Formatter`` format string
        stream: Stream for records
        file: Path of a log file, opened in append mode

    Example:
        from promptline.logging import setup_logging

        setup_logging("DEBUG", file="prompts.log")
    """
    threshold = _coerce_level(level)
    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = []
    if file:
        handlers.append(logging.FileHandler(file, encoding="utf-8"))
    if stream is not None or not file:
        handlers.append(logging.StreamHandler(stream or sys.stderr))

    _package_logger.handlers.clear()
    _package_logger.setLevel(threshold)
    for handler in handlers:
        handler.setFormatter(formatter)
        _package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a promptline submodule.

    Args:
        name: Dotted name below the package, e.g. ``"core.prompt"``.  A name
            that already starts with ``promptline.`` is used as is.
    """
    if name == PACKAGE or name.startswith(f"{PACKAGE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE}.{name}")


def set_level(level: str | int) -> None:
    """Change the package threshold without touching handlers."""
    _package_logger.setLevel(_coerce_level(level))


def disable() -> None:
    """Silence every promptline logger."""
    _package_logger.disabled = True


def enable() -> None:
    _package_logger.disabled = False
