"""
Color palette that can be switched off.

Every widget styles its output through a :class:`Colors` instance so that
``NO_COLOR``, dumb terminals and piped output all degrade to plain text.
"""

from __future__ import annotations

from promptline.tui.ansi import FG, style


class Colors:
    """
    Named SGR helpers bound to an *enabled* flag.

    When disabled every helper returns ``str(text)`` untouched.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def _wrap(self, text: object, **kwargs: object) -> str:
        text = "" if text is None else str(text)
        if not self.enabled:
            return text
        return style(text, **kwargs)  # type: ignore[arg-type]

    def gray(self, text: object) -> str:
        return self._wrap(text, fg=FG.GRAY)

    def cyan(self, text: object) -> str:
        return self._wrap(text, fg=FG.CYAN)

    def green(self, text: object) -> str:
        return self._wrap(text, fg=FG.GREEN)

    def yellow(self, text: object) -> str:
        return self._wrap(text, fg=FG.YELLOW)

    def red(self, text: object) -> str:
        return self._wrap(text, fg=FG.RED)

    def magenta(self, text: object) -> str:
        return self._wrap(text, fg=FG.MAGENTA)

    def dim(self, text: object) -> str:
        return self._wrap(text, dim=True)

    def inverse(self, text: object) -> str:
        return self._wrap(text, inverse=True)

    def strikethrough(self, text: object) -> str:
        return self._wrap(text, strikethrough=True)
