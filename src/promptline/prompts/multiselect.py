"""Multiple choices from a list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from promptline.core.options import Option, first_enabled, normalize_options
from promptline.core.prompt import Prompt, State
from promptline.core.viewport import Viewport
from promptline.prompts.select import more_line
from promptline.tui.keybindings import Action
from promptline.tui.keys import Key


class Multiselect(Prompt):
    """
    Pick any number of options.

    Space toggles the highlighted option, ``a`` toggles every enabled
    option and ``i`` inverts the selection.  The value is a list of option
    values in option order.
    """

    def __init__(
        self,
        message: str,
        options: Iterable[Any],
        *,
        initial_values: Iterable[Any] = (),
        required: bool = True,
        max_items: int | None = None,
        cursor_at: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.options: list[Option] = normalize_options(options)
        if not self.options:
            raise ValueError("Multiselect needs at least one option")
        self.required = required
        self.selected: list[Any] = []
        for value in initial_values:
            if value not in self.selected:
                self.selected.append(value)
        self.viewport = Viewport(
            len(self.options),
            window=max_items,
            cursor=first_enabled(self.options, cursor_at),
        )
        self._sync_value()

    def _is_disabled(self, index: int) -> bool:
        return self.options[index].disabled

    def _enabled_values(self) -> list[Any]:
        return [opt.value for opt in self.options if not opt.disabled]

    def _sync_value(self) -> None:
        self.value = [opt.value for opt in self.options if opt.value in self.selected]

    def is_selected(self, option: Option) -> bool:
        return option.value in self.selected

    def toggle(self, option: Option) -> None:
        if option.disabled:
            return
        if option.value in self.selected:
            self.selected.remove(option.value)
        else:
            self.selected.append(option.value)
        self._sync_value()

    def toggle_all(self) -> None:
        enabled = self._enabled_values()
        if all(v in self.selected for v in enabled):
            self.selected = [v for v in self.selected if v not in enabled]
        else:
            self.selected.extend(v for v in enabled if v not in self.selected)
        self._sync_value()

    def invert(self) -> None:
        enabled = self._enabled_values()
        kept = [v for v in self.selected if v not in enabled]
        self.selected = kept + [v for v in enabled if v not in self.selected]
        self._sync_value()

    def handle_input(self, key: Key, action: Action | None) -> None:
        if action is Action.UP:
            self.viewport.move(-1, self._is_disabled)
        elif action is Action.DOWN:
            self.viewport.move(1, self._is_disabled)
        elif action is Action.SPACE:
            self.toggle(self.options[self.viewport.cursor])
        elif key.raw.lower() == "a":
            self.toggle_all()
        elif key.raw.lower() == "i":
            self.invert()

    def submit(self) -> None:
        if self.required and not self.selected:
            self.error_message = "Please select at least one option (space to select, enter to submit)"
            self._set_state(State.ERROR)
            return
        super().submit()

    def default_value(self) -> Any:
        return list(self.value)

    def option_display(self, option: Option, active: bool) -> str:
        c, s = self.colors, self.symbols
        if option.disabled:
            return f"{c.dim(s.checkbox_inactive)} {c.strikethrough(c.dim(option.label))}"
        selected = self.is_selected(option)
        if selected:
            box = c.green(s.checkbox_selected)
        elif active:
            box = c.cyan(s.checkbox_active)
        else:
            box = c.dim(s.checkbox_inactive)
        label = option.label if active or selected else c.dim(option.label)
        hint = f" {c.dim(f'({option.hint})')}" if active and option.hint else ""
        return f"{box} {label}{hint}"

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
        labels = ", ".join(opt.label for opt in self.options if self.is_selected(opt))
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(labels)}"
