"""Progress bar for work of known length."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from promptline.core.indicator import FinishState, Indicator, IndicatorState

DEFAULT_WIDTH = 40


@dataclass
class ProgressState(IndicatorState):
    """Indicator state plus the position of the bar."""

    current: int = 0


class Progress(Indicator):
    """
    Bar with a percentage for measurable work.

    Parameters
    ----------
    total:
        Number of steps; must not be negative.  A total of zero renders as
        complete.
    message:
        Initial message.
    width:
        Bar width in cells.

    Example
    -------
    >>> bar = Progress(total=len(files))
    >>> bar.start("Copying")
    >>> for f in files:
    ...     copy(f)
    ...     bar.advance()
    >>> bar.stop("Copied")
    """

    _state: ProgressState

    def __init__(self, total: int, *, message: str = "", width: int = DEFAULT_WIDTH, **kwargs: Any) -> None:
        if total < 0:
            raise ValueError("total must be non-negative")
        super().__init__(**kwargs)
        self.total = total
        self.width = width
        self._initial_message = message

    def new_state(self) -> ProgressState:
        return ProgressState()

    def start(self, message: str = "") -> Progress:
        super().start(message or self._initial_message)
        return self

    @property
    def current(self) -> int:
        with self._lock:
            return self._state.current

    def advance(self, amount: int = 1) -> Progress:
        with self._lock:
            self._state.current = min(self._state.current + amount, self.total)
        self.refresh()
        return self

    def update(self, current: int) -> Progress:
        with self._lock:
            self._state.current = max(0, min(current, self.total))
        self.refresh()
        return self

    def message(self, text: str) -> None:
        super().message(text)
        self.refresh()

    def stop(self, message: str | None = None) -> None:
        with self._lock:
            self._state.current = self.total
        self.finish(FinishState.SUCCESS, message)

    def _ratio(self, current: int) -> float:
        return 1.0 if self.total == 0 else current / self.total

    @property
    def ratio(self) -> float:
        return self._ratio(self.current)

    def render_line(self, state: ProgressState) -> str:
        c, s = self.colors, self.symbols
        ratio = self._ratio(state.current)
        filled = round(ratio * self.width)
        bar = c.green(s.progress_filled * filled) + c.gray(s.progress_empty * (self.width - filled))
        pct = c.dim(f"{round(ratio * 100):>3}%")
        text = f"  {state.message}" if state.message else ""
        return f"{c.cyan(s.step_active)}  [{bar}] {pct}{text}"
