"""Tests for the list viewport."""

import pytest

from promptline.core.viewport import Viewport


class TestMove:
    """Tests for cursor movement."""

    def test_three_downs_wrap_to_start(self) -> None:
        """Three down moves over three items return to the first."""
        vp = Viewport(3)

        for _ in range(3):
            vp.move(1)

        assert vp.cursor == 0

    def test_down_moves_are_modular(self) -> None:
        """k downs from p land on (p + k) mod N."""
        for size in (1, 2, 5, 7):
            for start in range(size):
                for steps in range(0, 2 * size + 1):
                    vp = Viewport(size, cursor=start)
                    for _ in range(steps):
                        vp.move(1)
                    assert vp.cursor == (start + steps) % size

    def test_up_wraps_to_end(self) -> None:
        """Moving up from the first entry wraps to the last."""
        vp = Viewport(3)

        assert vp.move(-1) == 2

    def test_skips_disabled(self) -> None:
        """A disabled entry is jumped over."""
        disabled = {1}
        vp = Viewport(3)

        vp.move(1, lambda i: i in disabled)

        assert vp.cursor == 2

    def test_never_lands_on_disabled(self) -> None:
        """Repeated moves never rest on a disabled entry."""
        disabled = {0, 2, 3}
        vp = Viewport(6, cursor=1)

        for delta in (1, 1, 1, -1, -1, 1, 1, 1, 1):
            vp.move(delta, lambda i: i in disabled)
            assert vp.cursor not in disabled

    def test_all_disabled_stays_put(self) -> None:
        """When every entry is disabled the cursor does not move."""
        vp = Viewport(4, cursor=2)

        vp.move(1, lambda i: True)

        assert vp.cursor == 2

    def test_empty_list(self) -> None:
        """Moving over an empty list is a no-op."""
        vp = Viewport(0)

        assert vp.move(1) == 0

    def test_first_enabled(self) -> None:
        """first_enabled puts the cursor on the first usable entry."""
        vp = Viewport(4, cursor=3)

        assert vp.first_enabled(lambda i: i < 2) == 2


class TestScrolling:
    """Tests for the scroll window."""

    def test_cursor_always_inside_window(self) -> None:
        """offset <= cursor < offset + window after every move."""
        vp = Viewport(10, window=3)

        for delta in [1] * 12 + [-1] * 15:
            vp.move(delta)
            assert vp.scroll_offset <= vp.cursor < vp.scroll_offset + 3

    def test_scroll_follows_cursor_down(self) -> None:
        """Moving past the bottom scrolls by one."""
        vp = Viewport(10, window=3)
        for _ in range(3):
            vp.move(1)

        assert vp.cursor == 3
        assert vp.scroll_offset == 1
        assert list(vp.visible_range()) == [1, 2, 3]

    def test_wrap_to_end_scrolls_to_bottom(self) -> None:
        """Wrapping from the top shows the last page."""
        vp = Viewport(10, window=3)

        vp.move(-1)

        assert vp.cursor == 9
        assert vp.scroll_offset == 7

    def test_fits_in_window_never_scrolls(self) -> None:
        """A list no longer than the window always shows everything."""
        vp = Viewport(3, window=5)
        vp.move(-1)

        assert vp.scrolls is False
        assert vp.scroll_offset == 0
        assert list(vp.visible_range()) == [0, 1, 2]

    def test_visible_pairs(self) -> None:
        """visible() yields (index, item) pairs for the window."""
        items = list("abcdef")
        vp = Viewport(len(items), window=2, cursor=3)

        assert vp.visible(items) == [(2, "c"), (3, "d")]

    def test_hidden_counts(self) -> None:
        """Entries above and below the window are counted."""
        vp = Viewport(10, window=3, cursor=5)

        assert vp.hidden_above == vp.scroll_offset
        assert vp.hidden_above + 3 + vp.hidden_below == 10

    def test_resize_clamps_cursor(self) -> None:
        """Shrinking the list pulls the cursor back inside it."""
        vp = Viewport(10, window=3, cursor=8)

        vp.resize(4)

        assert vp.cursor == 3
        assert vp.scroll_offset <= vp.cursor < vp.scroll_offset + 3

    def test_reset(self) -> None:
        """reset returns to the top."""
        vp = Viewport(10, window=3, cursor=8)

        vp.reset(5)

        assert vp.cursor == 0
        assert vp.scroll_offset == 0
        assert vp.size == 5

    def test_invalid_window(self) -> None:
        """A window must show at least one row."""
        with pytest.raises(ValueError):
            Viewport(3, window=0)
