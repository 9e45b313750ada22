"""Tests for escape sequences and the color palette."""

from promptline.tui.ansi import FG, RESET, sgr, style
from promptline.tui.colors import Colors


class TestStyle:
    """Tests for style()."""

    def test_color_and_attributes(self) -> None:
        assert style("x", fg=FG.RED, dim=True) == "\x1b[31m\x1b[2mx\x1b[0m"

    def test_combined_attributes(self) -> None:
        assert style("x", dim=True, strikethrough=True) == f"{sgr(2, 9)}x{RESET}"

    def test_nothing_requested(self) -> None:
        assert style("x") == "x"
        assert style("x", dim=False) == "x"


class TestColors:
    """Tests for Colors."""

    def test_enabled(self) -> None:
        assert Colors(True).green("ok") == f"{FG.GREEN}ok{RESET}"

    def test_disabled_returns_plain_text(self) -> None:
        c = Colors(False)

        assert c.red(3) == "3"
        assert c.inverse(None) == ""
