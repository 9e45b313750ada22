"""Yes/no prompt."""

from __future__ import annotations

from typing import Any

from promptline.core.prompt import Prompt
from promptline.tui.keybindings import Action
from promptline.tui.keys import Key


class Confirm(Prompt):
    """
    Toggle between two answers.

    Left/up (or ``y``) selects the active answer, right/down (or ``n``) the
    inactive one.  The value is a ``bool``.
    """

    def __init__(
        self,
        message: str,
        *,
        active: str = "Yes",
        inactive: str = "No",
        initial_value: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.active_label = active
        self.inactive_label = inactive
        self.value = initial_value

    def handle_input(self, key: Key, action: Action | None) -> None:
        if action in (Action.LEFT, Action.UP):
            self.value = True
        elif action in (Action.RIGHT, Action.DOWN):
            self.value = False
        elif key.raw.lower() == "y":
            self.value = True
        elif key.raw.lower() == "n":
            self.value = False

    def _choice(self, label: str, selected: bool) -> str:
        c, s = self.colors, self.symbols
        if selected:
            return f"{c.green(s.radio_active)} {label}"
        return f"{c.dim(s.radio_inactive)} {c.dim(label)}"

    def build_frame(self) -> str:
        yes = self._choice(self.active_label, self.value is True)
        no = self._choice(self.inactive_label, self.value is False)
        return f"{self.header()}{self.active_bar}  {yes} {self.colors.dim('/')} {no}\n{self.validation_lines()}"

    def build_final_frame(self) -> str:
        label = self.active_label if self.value else self.inactive_label
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(label)}"
