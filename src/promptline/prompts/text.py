"""Single-line free text prompt."""

from __future__ import annotations

from typing import Any

from promptline.core.prompt import Prompt
from promptline.core.text_input import EditableText
from promptline.tui.keybindings import Action
from promptline.tui.keys import Key


class Text(Prompt):
    """
    Free text entry.

    Parameters
    ----------
    message:
        Question to ask.
    placeholder:
        Dimmed hint shown while the input is empty.
    default_value:
        Submitted when the input is left empty.
    initial_value:
        Text the input starts with.
    **kwargs:
        Passed to :class:`~promptline.core.prompt.Prompt`.
    """

    def __init__(
        self,
        message: str,
        *,
        placeholder: str | None = None,
        default_value: str | None = None,
        initial_value: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.placeholder = placeholder
        self.default = default_value
        self.buffer = EditableText(initial_value)
        self.value = self.buffer.value

    def handle_input(self, key: Key, action: Action | None) -> None:
        # Letters such as h/j/k/l are text here, not navigation.
        self.buffer.handle_key(key)
        self.value = self.buffer.value

    def submit(self) -> None:
        if not self.buffer.value and self.default is not None:
            self.value = self.default
        else:
            self.value = self.buffer.value
        super().submit()

    def default_value(self) -> Any:
        if not self.buffer.value and self.default is not None:
            return self.default
        return self.buffer.value

    def build_frame(self) -> str:
        display = self.buffer.render(self.colors, self.placeholder)
        return f"{self.header()}{self.active_bar}  {display}\n{self.validation_lines()}"

    def build_final_frame(self) -> str:
        shown = self.value if isinstance(self.value, str) else self.buffer.value
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(shown)}"
