"""
Animated indicators driven by a background thread.

An :class:`Indicator` owns exactly one daemon worker thread while it runs.
The worker and the caller share nothing but an :class:`IndicatorState`
guarded by a single lock; the worker polls ``running`` and exits on its
own once a terminal call (:meth:`Indicator.finish` or
:meth:`Indicator.clear`) clears it.
"""

from __future__ import annotations

import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, TextIO

from promptline.config import Settings, get_settings
from promptline.logging import get_logger
from promptline.tui import environment
from promptline.tui.ansi import clear_to_end, hide_cursor, show_cursor
from promptline.tui.colors import Colors
from promptline.tui.symbols import get_symbols

logger = get_logger("indicator")


class FinishState(str, Enum):
    """How an indicator ended."""

    SUCCESS = "success"
    ERROR = "error"
    CANCEL = "cancel"


@dataclass
class IndicatorState:
    """Mutable state shared between the caller and the worker thread."""

    running: bool = False
    cancelled: bool = False
    message: str = ""
    frame_index: int = 0
    finished: bool = False
    last_line: str | None = None
    started_at: float = 0.0


class Indicator(ABC):
    """
    Base class for spinners and progress bars.

    Parameters
    ----------
    delay:
        Seconds between animation frames.  Defaults to the glyph table's
        spinner delay.
    output:
        Text stream to draw on, defaults to ``sys.stdout``.
    settings:
        Settings to use instead of the process default.
    """

    def __init__(
        self,
        *,
        delay: float | None = None,
        output: TextIO | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.output: TextIO = output if output is not None else sys.stdout
        self.colors = Colors(self.settings.use_color(self.output))
        self.symbols = get_symbols(self.settings.use_unicode(self.output))
        self.delay = delay if delay is not None else self.symbols.spinner_delay
        self._tty = environment.is_tty(self.output)

        self._state = self.new_state()
        self._lock = threading.Lock()
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def render_line(self, state: IndicatorState) -> str:
        """Build the animated line.  Called with the lock held."""
        ...

    def new_state(self) -> IndicatorState:
        """Fresh shared state.  Subclasses with extra fields return a subclass."""
        return IndicatorState()

    def final_suffix(self, state: IndicatorState) -> str:
        """Text appended to the final line.  Called with the lock held."""
        return ""

    def clean_message(self, text: str) -> str:
        return text

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        with self._lock:
            return self._state.running

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._state.cancelled

    def start(self, message: str = "") -> Indicator:
        """Start the worker thread.  A running or finished indicator is left alone."""
        with self._lock:
            if self._state.running or self._state.finished:
                return self
            self._state.running = True
            self._state.message = self.clean_message(message)
            self._state.frame_index = 0
            self._state.last_line = None
            self._state.started_at = time.monotonic()

        if self._tty:
            self._write(hide_cursor())
        if self.settings.with_guide:
            self._write(f"{self.colors.gray(self.symbols.bar)}\n")

        self._wake.clear()
        self._thread = threading.Thread(
            target=self._run, name=f"promptline-{type(self).__name__.lower()}", daemon=True
        )
        self._thread.start()
        logger.debug("%s started: %r", type(self).__name__, message)
        return self

    def message(self, text: str) -> None:
        """Replace the message shown next to the animation."""
        with self._lock:
            self._state.message = self.clean_message(text)

    def finish(self, state: FinishState | str = FinishState.SUCCESS, message: str | None = None) -> None:
        """
        Stop the worker and write the final line.

        Only the first call has any effect; later calls write nothing.
        """
        state = FinishState(state)
        with self._lock:
            if self._state.finished:
                return
            self._state.finished = True
            self._state.running = False
            if state is FinishState.CANCEL:
                self._state.cancelled = True
            text = self._state.message if message is None else self.clean_message(message)
            suffix = self.final_suffix(self._state)
            had_line = self._state.last_line is not None

        self._join()

        buf = []
        if self._tty and had_line:
            buf.append(f"\r{clear_to_end()}")
        buf.append(f"{self._final_symbol(state)}  {text}{suffix}\n")
        if self._tty:
            buf.append(show_cursor())
        self._write("".join(buf))
        logger.debug("%s finished: %s", type(self).__name__, state.value)

    def stop(self, message: str | None = None) -> None:
        self.finish(FinishState.SUCCESS, message)

    def error(self, message: str | None = None) -> None:
        self.finish(FinishState.ERROR, message)

    def cancel(self, message: str | None = None) -> None:
        self.finish(FinishState.CANCEL, message)

    def clear(self) -> None:
        """Stop without leaving a final line behind."""
        with self._lock:
            if self._state.finished:
                return
            self._state.finished = True
            self._state.running = False
            had_line = self._state.last_line is not None

        self._join()
        if self._tty:
            self._write((f"\r{clear_to_end()}" if had_line else "") + show_cursor())

    def __enter__(self) -> Indicator:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if exc_type is None:
            self.stop()
        else:
            self.error()

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while True:
            with self._lock:
                if not self._state.running:
                    break
                self._emit(self.render_line(self._state))
                self._state.frame_index += 1
            self._wake.wait(self.delay)

    def refresh(self) -> None:
        """Redraw immediately instead of waiting for the next tick."""
        with self._lock:
            if self._state.running:
                self._emit(self.render_line(self._state))

    def _emit(self, line: str) -> None:
        # Caller holds the lock.
        if line == self._state.last_line:
            return
        self._state.last_line = line
        if self._tty:
            self._write(f"\r{clear_to_end()}{line}")

    def _join(self) -> None:
        self._wake.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _final_symbol(self, state: FinishState) -> str:
        if state is FinishState.SUCCESS:
            return self.colors.green(self.symbols.step_submit)
        if state is FinishState.ERROR:
            return self.colors.red(self.symbols.step_error)
        return self.colors.red(self.symbols.step_cancel)

    def _write(self, data: str) -> None:
        self.output.write(data)
        self.output.flush()
