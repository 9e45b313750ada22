"""Session framing lines: ``intro``, ``outro`` and ``cancel``."""

from __future__ import annotations

import sys
from typing import TextIO

from promptline.config import Settings, get_settings
from promptline.tui.colors import Colors
from promptline.tui.symbols import Symbols, get_symbols


def _context(output: TextIO | None, settings: Settings | None) -> tuple[TextIO, Colors, Symbols]:
    settings = settings if settings is not None else get_settings()
    output = output if output is not None else sys.stdout
    return output, Colors(settings.use_color(output)), get_symbols(settings.use_unicode(output))


def intro(title: str = "", *, output: TextIO | None = None, settings: Settings | None = None) -> None:
    """Open a prompt session: ``┌  title``."""
    output, colors, symbols = _context(output, settings)
    output.write(f"{colors.gray(symbols.bar_start)}  {title}\n")
    output.flush()


def outro(message: str = "", *, output: TextIO | None = None, settings: Settings | None = None) -> None:
    """Close a prompt session: ``└  message`` followed by a blank line."""
    output, colors, symbols = _context(output, settings)
    output.write(f"{colors.gray(symbols.bar)}\n{colors.gray(symbols.bar_end)}  {message}\n\n")
    output.flush()


def cancel(message: str = "", *, output: TextIO | None = None, settings: Settings | None = None) -> None:
    """Close a cancelled session with a red message."""
    output, colors, symbols = _context(output, settings)
    output.write(f"{colors.gray(symbols.bar_end)}  {colors.red(message)}\n\n")
    output.flush()
