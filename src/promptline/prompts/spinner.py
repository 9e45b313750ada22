"""Spinner for work of unknown length."""

from __future__ import annotations

import re
import time
from collections.abc import Callable, Sequence
from typing import Any

from promptline.core.indicator import Indicator, IndicatorState

_TRAILING_DOTS = re.compile(r"\.+$")


def format_elapsed(seconds: float) -> str:
    """``[12s]`` or ``[2m 5s]``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"[{minutes}m {secs}s]" if minutes else f"[{secs}s]"


class Spinner(Indicator):
    """
    Animated spinner.

    Parameters
    ----------
    indicator:
        ``"dots"`` animates trailing dots after the message, ``"timer"``
        shows the elapsed time instead.
    frames:
        Custom animation frames.  Defaults to the glyph table's frames.
    delay:
        Seconds between frames.
    style_frame:
        Callable styling each frame; defaults to magenta.

    Example
    -------
    >>> spin = Spinner(output=io.StringIO())
    >>> spin.start("Installing")
    >>> spin.stop("Installed")
    """

    def __init__(
        self,
        *,
        indicator: str = "dots",
        frames: Sequence[str] | None = None,
        delay: float | None = None,
        style_frame: Callable[[str], str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(delay=delay, **kwargs)
        if indicator not in ("dots", "timer"):
            raise ValueError(f"indicator must be 'dots' or 'timer', got {indicator!r}")
        self.indicator = indicator
        self.frames = tuple(frames) if frames else self.symbols.spinner_frames
        self.style_frame = style_frame or self.colors.magenta

    def clean_message(self, text: str) -> str:
        # The dots animation supplies its own ellipsis.
        return _TRAILING_DOTS.sub("", text or "")

    def render_line(self, state: IndicatorState) -> str:
        frame = self.style_frame(self.frames[state.frame_index % len(self.frames)])
        if self.indicator == "timer":
            suffix = f" {format_elapsed(time.monotonic() - state.started_at)}"
        else:
            suffix = "." * ((state.frame_index // 2) % 4)
        return f"{frame}  {state.message}{suffix}"

    def final_suffix(self, state: IndicatorState) -> str:
        if self.indicator == "timer" and state.started_at:
            return f" {format_elapsed(time.monotonic() - state.started_at)}"
        return ""
