"""Single choice from a list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from promptline.core.options import Option, first_enabled, normalize_options
from promptline.core.prompt import Prompt
from promptline.core.viewport import Viewport
from promptline.tui.colors import Colors
from promptline.tui.keybindings import Action
from promptline.tui.keys import Key


def more_line(colors: Colors, bar: str, count: int, direction: str) -> str:
    """``... 3 more`` marker for rows scrolled out of view."""
    return f"{bar}  {colors.dim(f'... {count} more {direction}')}\n"


class Select(Prompt):
    """
    Pick one option with the arrow keys (or ``j``/``k``).

    Parameters
    ----------
    message:
        Question to ask.
    options:
        Choices; anything :func:`~promptline.core.options.normalize_options`
        accepts.
    initial_value:
        Value of the option the cursor starts on.
    max_items:
        Number of rows to show before scrolling.
    """

    def __init__(
        self,
        message: str,
        options: Iterable[Any],
        *,
        initial_value: Any = None,
        max_items: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.options: list[Option] = normalize_options(options)
        if not self.options:
            raise ValueError("Select needs at least one option")
        self.viewport = Viewport(
            len(self.options),
            window=max_items,
            cursor=first_enabled(self.options, initial_value),
        )
        self.value = self.current.value

    @property
    def current(self) -> Option:
        return self.options[self.viewport.cursor]

    def _is_disabled(self, index: int) -> bool:
        return self.options[index].disabled

    def handle_input(self, key: Key, action: Action | None) -> None:
        if action in (Action.UP, Action.LEFT):
            self.viewport.move(-1, self._is_disabled)
        elif action in (Action.DOWN, Action.RIGHT):
            self.viewport.move(1, self._is_disabled)
        self.value = self.current.value

    def option_display(self, option: Option, active: bool) -> str:
        c, s = self.colors, self.symbols
        if option.disabled:
            return f"{c.dim(s.radio_inactive)} {c.strikethrough(c.dim(option.label))}"
        if active:
            hint = f" {c.dim(f'({option.hint})')}" if option.hint else ""
            return f"{c.green(s.radio_active)} {option.label}{hint}"
        return f"{c.dim(s.radio_inactive)} {c.dim(option.label)}"

    def build_frame(self) -> str:
        lines = [self.header()]
        vp = self.viewport
        if vp.hidden_above:
            lines.append(more_line(self.colors, self.active_bar, vp.hidden_above, "above"))
        for idx, option in vp.visible(self.options):
            lines.append(f"{self.active_bar}  {self.option_display(option, idx == vp.cursor)}\n")
        if vp.hidden_below:
            lines.append(more_line(self.colors, self.active_bar, vp.hidden_below, "below"))
        lines.append(self.validation_lines())
        return "".join(lines)

    def build_final_frame(self) -> str:
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(self.current.label)}"
