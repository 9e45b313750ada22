"""
Grapheme-aware single-line edit buffer.

The cursor counts user-perceived characters (grapheme clusters), so an
emoji with skin-tone modifiers or a letter with combining accents is moved
over and deleted as one unit.
"""

from __future__ import annotations

import grapheme

from promptline.tui.colors import Colors
from promptline.tui.keybindings import KeybindingsManager
from promptline.tui.keys import Key


class EditableText:
    """
    Text buffer with a cursor, owned by free-text prompts.

    Parameters
    ----------
    value:
        Initial text.  The cursor starts at its end.
    """

    def __init__(self, value: str = "") -> None:
        self._value = value
        self.cursor = grapheme.length(value)

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, text: str) -> None:
        self._value = text
        self.cursor = grapheme.length(text)

    def clusters(self) -> list[str]:
        return list(grapheme.graphemes(self._value))

    def __len__(self) -> int:
        return grapheme.length(self._value)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert(self, text: str) -> None:
        """
        Insert *text* at the cursor.

        A combining mark typed after a base character joins that cluster
        instead of becoming a new one, so the cursor only advances by the
        number of clusters actually added.
        """
        clusters = self.clusters()
        before = "".join(clusters[: self.cursor])
        after = "".join(clusters[self.cursor :])
        updated = before + text + after
        added = grapheme.length(updated) - len(clusters)
        self._value = updated
        self.cursor = min(max(self.cursor + added, 0), grapheme.length(updated))

    def backspace(self) -> bool:
        """Delete the cluster before the cursor."""
        if self.cursor == 0:
            return False
        clusters = self.clusters()
        del clusters[self.cursor - 1]
        self._value = "".join(clusters)
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        """Delete the cluster under the cursor."""
        clusters = self.clusters()
        if self.cursor >= len(clusters):
            return False
        del clusters[self.cursor]
        self._value = "".join(clusters)
        return True

    def kill_to_start(self) -> bool:
        """Delete everything before the cursor (Ctrl+U)."""
        if self.cursor == 0:
            return False
        self._value = "".join(self.clusters()[self.cursor :])
        self.cursor = 0
        return True

    def kill_word(self) -> bool:
        """Delete the word before the cursor (Ctrl+W)."""
        boundary = self._word_boundary_left()
        if boundary == self.cursor:
            return False
        clusters = self.clusters()
        self._value = "".join(clusters[:boundary] + clusters[self.cursor :])
        self.cursor = boundary
        return True

    # ------------------------------------------------------------------
    # Cursor movement
    # ------------------------------------------------------------------

    def move_left(self) -> None:
        self.cursor = max(self.cursor - 1, 0)

    def move_right(self) -> None:
        self.cursor = min(self.cursor + 1, len(self))

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self)

    def _word_boundary_left(self) -> int:
        clusters = self.clusters()
        pos = self.cursor - 1
        while pos >= 0 and not clusters[pos].isalnum():
            pos -= 1
        while pos >= 0 and clusters[pos].isalnum():
            pos -= 1
        return pos + 1

    # ------------------------------------------------------------------
    # Key handling
    # ------------------------------------------------------------------

    def handle_key(self, key: Key) -> bool:
        """
        Apply an editing key.  Returns ``True`` if the key was consumed.

        Only real arrow keys move the cursor; ``h``/``l`` are plain text
        here even though they alias to left/right elsewhere.
        """
        name = key.name

        if KeybindingsManager.is_backspace(key):
            self.backspace()
            return True
        if name == "left" and not key.alt:
            self.move_left()
            return True
        if name == "right" and not key.alt:
            self.move_right()
            return True
        if name in ("home", "ctrl+a"):
            self.home()
            return True
        if name in ("end", "ctrl+e"):
            self.end()
            return True
        if name == "delete":
            self.delete()
            return True
        if name == "ctrl+u":
            self.kill_to_start()
            return True
        if name == "ctrl+w":
            self.kill_word()
            return True
        if KeybindingsManager.is_printable(key):
            self.insert(key.raw)
            return True
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, colors: Colors, placeholder: str | None = None) -> str:
        """
        Render the buffer with an inverse-video cursor.

        An empty buffer shows *placeholder* dimmed, with the cursor on its
        first character.
        """
        if not self._value:
            if not placeholder:
                return colors.inverse(" ")
            chars = list(grapheme.graphemes(placeholder))
            return colors.inverse(chars[0]) + colors.dim("".join(chars[1:]))

        clusters = self.clusters()
        if self.cursor >= len(clusters):
            return self._value + colors.inverse(" ")
        before = "".join(clusters[: self.cursor])
        current = colors.inverse(clusters[self.cursor])
        after = "".join(clusters[self.cursor + 1 :])
        return f"{before}{current}{after}"
