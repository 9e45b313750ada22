"""
ANSI escape sequences used by prompt frames.

Only the handful of sequences the engine needs are produced here: SGR
styling, relative cursor movement, line/screen clearing and cursor
visibility.  There is no terminfo lookup.
"""

from __future__ import annotations

CSI = "\x1b["
RESET = f"{CSI}0m"


def sgr(*codes: int) -> str:
    """Select Graphic Rendition sequence for *codes*."""
    return f"{CSI}{';'.join(str(c) for c in codes)}m"


class FG:
    """Foreground color sequences."""

    RED = sgr(31)
    GREEN = sgr(32)
    YELLOW = sgr(33)
    MAGENTA = sgr(35)
    CYAN = sgr(36)
    GRAY = sgr(90)


# SGR attribute codes by keyword
ATTRIBUTES: dict[str, int] = {
    "dim": 2,
    "inverse": 7,
    "strikethrough": 9,
}


def style(text: str, *, fg: str | None = None, **attrs: bool) -> str:
    """
    Wrap *text* in SGR sequences followed by a reset.

    ``attrs`` are keywords from :data:`ATTRIBUTES`; an unknown keyword
    raises ``KeyError``.  Text is returned unchanged when nothing is
    requested.
    """
    prefix = fg or ""
    codes = [ATTRIBUTES[name] for name, on in attrs.items() if on]
    if codes:
        prefix += sgr(*codes)
    if not prefix:
        return text
    return f"{prefix}{text}{RESET}"


# ---------------------------------------------------------------------------
# Cursor and clearing
# ---------------------------------------------------------------------------

def cursor_up(n: int = 1) -> str:
    return f"{CSI}{n}A"


def cursor_column(n: int = 1) -> str:
    """Move to column *n* (1-based) of the current row."""
    return f"{CSI}{n}G"


def clear_down() -> str:
    """Erase from the cursor to the end of the screen."""
    return f"{CSI}J"


def clear_to_end() -> str:
    """Erase from the cursor to the end of the line."""
    return f"{CSI}K"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"
