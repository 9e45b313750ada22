"""
Glyph tables.

Two complete tables are kept side by side; :func:`get_symbols` picks one.
Every glyph has an ASCII fallback so that nothing in a frame depends on
Unicode support.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Symbols:
    """The glyph set used to draw prompts and indicators."""

    # Step indicators
    step_active: str
    step_cancel: str
    step_error: str
    step_submit: str

    # Radio buttons / checkboxes
    radio_active: str
    radio_inactive: str
    checkbox_active: str
    checkbox_selected: str
    checkbox_inactive: str

    password_mask: str

    # Bars and connectors
    bar: str
    bar_start: str
    bar_end: str

    # Progress bar
    progress_filled: str
    progress_empty: str

    # Spinner animation
    spinner_frames: tuple[str, ...]
    spinner_delay: float


UNICODE_SYMBOLS = Symbols(
    step_active="◆",
    step_cancel="■",
    step_error="▲",
    step_submit="◇",
    radio_active="●",
    radio_inactive="○",
    checkbox_active="◻",
    checkbox_selected="◼",
    checkbox_inactive="◻",
    password_mask="▪",
    bar="│",
    bar_start="┌",
    bar_end="└",
    progress_filled="█",
    progress_empty="░",
    spinner_frames=("◒", "◐", "◓", "◑"),
    spinner_delay=0.08,
)

ASCII_SYMBOLS = Symbols(
    step_active="*",
    step_cancel="x",
    step_error="x",
    step_submit="o",
    radio_active=">",
    radio_inactive=" ",
    checkbox_active="[.]",
    checkbox_selected="[+]",
    checkbox_inactive="[ ]",
    password_mask="*",
    bar="|",
    bar_start="+",
    bar_end="+",
    progress_filled="#",
    progress_empty="-",
    spinner_frames=(".", "o", "O", "0"),
    spinner_delay=0.12,
)


def get_symbols(unicode: bool) -> Symbols:
    """Return the Unicode table or its ASCII fallback."""
    return UNICODE_SYMBOLS if unicode else ASCII_SYMBOLS
