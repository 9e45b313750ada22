"""
Cursor-following viewport over a list.

Widgets own a :class:`Viewport` and ask it which slice of their list to draw.
When a window is set and the list is longer than the window, the viewport
keeps ``scroll_offset <= cursor < scroll_offset + window`` after every move.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")

IsDisabled = Callable[[int], bool]


class Viewport:
    """
    Cursor and scroll position over a list of *size* entries.

    Parameters
    ----------
    size:
        Number of entries in the list.
    window:
        Maximum number of visible entries.  ``None`` shows everything.
    cursor:
        Initial cursor index.
    """

    def __init__(self, size: int, window: int | None = None, cursor: int = 0) -> None:
        if window is not None and window < 1:
            raise ValueError("window must be at least 1")
        self._size = max(0, size)
        self.window = window
        self.cursor = min(max(cursor, 0), max(self._size - 1, 0))
        self.scroll_offset = 0
        self.update_scroll()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def _span(self) -> int:
        return self.window if self.window is not None else self._size

    @property
    def scrolls(self) -> bool:
        """``True`` when the list is longer than the window."""
        return self.window is not None and self._size > self.window

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move(self, delta: int, is_disabled: IsDisabled | None = None) -> int:
        """
        Move the cursor by *delta* with wraparound, skipping disabled entries.

        At most ``size`` candidate positions are tried.  If every candidate
        is disabled the cursor stays where it is.  Returns the new cursor.
        """
        if self._size == 0 or delta == 0:
            return self.cursor

        idx = self.cursor
        for _ in range(self._size):
            idx = (idx + delta) % self._size
            if is_disabled is None or not is_disabled(idx):
                self.cursor = idx
                break

        self.update_scroll()
        return self.cursor

    def set_cursor(self, index: int) -> None:
        """Jump to *index* (clamped to the list)."""
        if self._size == 0:
            self.cursor = 0
        else:
            self.cursor = min(max(index, 0), self._size - 1)
        self.update_scroll()

    def first_enabled(self, is_disabled: IsDisabled | None = None) -> int:
        """Put the cursor on the first entry that is not disabled."""
        for idx in range(self._size):
            if is_disabled is None or not is_disabled(idx):
                self.set_cursor(idx)
                break
        return self.cursor

    def resize(self, size: int) -> None:
        """Adopt a new list length, e.g. after filtering."""
        self._size = max(0, size)
        self.set_cursor(self.cursor)

    def reset(self, size: int | None = None) -> None:
        """Return cursor and scroll offset to the top."""
        if size is not None:
            self._size = max(0, size)
        self.cursor = 0
        self.scroll_offset = 0

    def update_scroll(self) -> None:
        """Re-clamp the scroll offset so the cursor is inside the window."""
        if not self.scrolls:
            self.scroll_offset = 0
            return

        if self.cursor < self.scroll_offset:
            self.scroll_offset = self.cursor
        elif self.cursor >= self.scroll_offset + self._span:
            self.scroll_offset = self.cursor - self._span + 1
        self.scroll_offset = min(self.scroll_offset, self._size - self._span)

    # ------------------------------------------------------------------
    # Windowing
    # ------------------------------------------------------------------

    def visible_range(self) -> range:
        """Indices of the entries currently inside the window."""
        if not self.scrolls:
            return range(self._size)
        return range(self.scroll_offset, self.scroll_offset + self._span)

    def visible(self, items: Sequence[T]) -> list[tuple[int, T]]:
        """``(index, item)`` pairs for the visible slice of *items*."""
        return [(i, items[i]) for i in self.visible_range() if i < len(items)]

    @property
    def hidden_above(self) -> int:
        return self.scroll_offset if self.scrolls else 0

    @property
    def hidden_below(self) -> int:
        if not self.scrolls:
            return 0
        return self._size - (self.scroll_offset + self._span)
