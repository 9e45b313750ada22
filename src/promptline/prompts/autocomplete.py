"""Type-to-filter selection."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from promptline.core import fuzzy
from promptline.core.options import Option, normalize_options
from promptline.core.prompt import Prompt, State
from promptline.core.text_input import EditableText
from promptline.core.viewport import Viewport
from promptline.prompts.select import more_line
from promptline.tui.keybindings import Action, KeybindingsManager
from promptline.tui.keys import Key

OptionFilter = Callable[[Option, str], bool]


class Autocomplete(Prompt):
    """
    Select from a list narrowed down by a fuzzy search query.

    Printable keys always go to the query, so ``j``/``k`` can be typed;
    only the arrow keys move through the matches.

    Parameters
    ----------
    message:
        Question to ask.
    options:
        Choices to search.
    max_items:
        Number of matches shown at once.
    placeholder:
        Dimmed hint shown while the query is empty.
    filter:
        ``filter(option, query) -> bool`` replacing fuzzy ranking.  Matches
        then keep their original order.
    """

    def __init__(
        self,
        message: str,
        options: Iterable[Any],
        *,
        max_items: int = 5,
        placeholder: str | None = None,
        filter: OptionFilter | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.all_options: list[Option] = normalize_options(options)
        if not self.all_options:
            raise ValueError("Autocomplete needs at least one option")
        self.placeholder = placeholder
        self.option_filter = filter
        self.query = EditableText()
        self.filtered: list[Option] = list(self.all_options)
        self.viewport = Viewport(len(self.filtered), window=max_items)
        self._refilter()

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _refilter(self) -> None:
        text = self.query.value
        if self.option_filter is not None:
            self.filtered = [opt for opt in self.all_options if self.option_filter(opt, text)]
        else:
            self.filtered = fuzzy.filter_options(self.all_options, text)
        self.viewport.reset(len(self.filtered))
        self.viewport.first_enabled(self._is_disabled)

    def _is_disabled(self, index: int) -> bool:
        return self.filtered[index].disabled

    @property
    def current(self) -> Option | None:
        if not self.filtered:
            return None
        option = self.filtered[self.viewport.cursor]
        return None if option.disabled else option

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, key: Key) -> None:
        if self.is_terminal:
            return
        if KeybindingsManager.is_printable(key) or KeybindingsManager.is_backspace(key):
            self.clear_flags()
            self.query.handle_key(key)
            self._refilter()
            return
        super().handle_key(key)

    def handle_input(self, key: Key, action: Action | None) -> None:
        if action is Action.UP:
            self.viewport.move(-1, self._is_disabled)
        elif action is Action.DOWN:
            self.viewport.move(1, self._is_disabled)
        else:
            before = self.query.value
            self.query.handle_key(key)
            if self.query.value != before:
                self._refilter()

    def submit(self) -> None:
        option = self.current
        if option is None:
            self.error_message = "No matching option"
            self._set_state(State.ERROR)
            return
        self.value = option.value
        super().submit()

    def default_value(self) -> Any:
        option = self.current
        return option.value if option is not None else None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def option_display(self, option: Option, active: bool) -> str:
        c, s = self.colors, self.symbols
        if option.disabled:
            return f"{c.dim(s.radio_inactive)} {c.strikethrough(c.dim(option.label))}"
        if active:
            hint = c.dim(f" ({option.hint})") if option.hint else ""
            return f"{c.green(s.radio_active)} {option.label}{hint}"
        return f"{c.dim(s.radio_inactive)} {c.dim(option.label)}"

    def build_frame(self) -> str:
        lines = [self.header()]
        lines.append(f"{self.active_bar}  {self.query.render(self.colors, self.placeholder)}\n")
        vp = self.viewport
        if not self.filtered:
            lines.append(f"{self.active_bar}  {self.colors.dim('No matches')}\n")
        if vp.hidden_above:
            lines.append(more_line(self.colors, self.active_bar, vp.hidden_above, "above"))
        for idx, option in vp.visible(self.filtered):
            lines.append(f"{self.active_bar}  {self.option_display(option, idx == vp.cursor)}\n")
        if vp.hidden_below:
            lines.append(more_line(self.colors, self.active_bar, vp.hidden_below, "below"))
        lines.append(self.validation_lines())
        return "".join(lines)

    def build_final_frame(self) -> str:
        option = self.current
        shown = option.label if option is not None else self.query.value
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.final_value_line(shown)}"
