"""Masked text prompt."""

from __future__ import annotations

from typing import Any

import grapheme

from promptline.core.prompt import Prompt
from promptline.core.text_input import EditableText
from promptline.tui.keybindings import Action, KeybindingsManager
from promptline.tui.keys import Key


class Password(Prompt):
    """
    Text entry that never echoes what is typed.

    Only appending and backspace are supported; the cursor cannot be moved
    inside a value the user cannot see.
    """

    def __init__(self, message: str, *, mask: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.mask = mask if mask is not None else self.symbols.password_mask
        self.buffer = EditableText()
        self.value = ""

    def handle_input(self, key: Key, action: Action | None) -> None:
        if KeybindingsManager.is_backspace(key):
            self.buffer.backspace()
        elif KeybindingsManager.is_printable(key):
            self.buffer.end()
            self.buffer.insert(key.raw)
        self.value = self.buffer.value

    def masked(self) -> str:
        return self.mask * grapheme.length(self.buffer.value)

    def build_frame(self) -> str:
        display = self.masked() + self.colors.inverse(" ")
        return f"{self.header()}{self.active_bar}  {display}\n{self.validation_lines()}"

    def build_final_frame(self) -> str:
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(self.masked())}"
