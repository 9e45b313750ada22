"""
Helpers for driving prompts without a terminal.

    from promptline.testing import simulate
    from promptline.prompts import Text

    result = simulate(Text, ["hello", "\\r"], message="Name?")
    assert result.value == "hello"
"""

from __future__ import annotations

import io
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from promptline.config import Settings
from promptline.core.prompt import Prompt
from promptline.tui.keys import Key, parse_key


def _expand(item: Key | str) -> list[Key]:
    if isinstance(item, Key):
        return [item]
    if item.startswith("\x1b") or len(item) <= 1:
        return [parse_key(item.encode("utf-8"))]
    # Plain text arrives one code point at a time, as from a terminal.
    return [parse_key(ch.encode("utf-8")) for ch in item]


class ScriptedInput:
    """
    Key source replaying a fixed script.

    Items are :class:`Key` objects or strings.  A string starting with ESC,
    or of length one, is a single key; any other string is typed one
    code point at a time.  Reading past the end raises ``EOFError``.
    """

    def __init__(self, script: Iterable[Key | str] = ()) -> None:
        self._keys: deque[Key] = deque()
        self.extend(script)

    def extend(self, script: Iterable[Key | str]) -> None:
        for item in script:
            self._keys.extend(_expand(item))

    def read(self) -> Key:
        if not self._keys:
            raise EOFError("scripted input exhausted")
        return self._keys.popleft()

    def __len__(self) -> int:
        return len(self._keys)


class TTYBuffer(io.StringIO):
    """In-memory output that reports itself as a terminal."""

    def isatty(self) -> bool:
        return True


def scripted_settings(**overrides: Any) -> Settings:
    """Interactive, colorless settings with Unicode glyphs."""
    values: dict[str, Any] = {"ci_mode": False, "color": False, "unicode": True}
    values.update(overrides)
    return Settings(**values)


@dataclass
class Simulation:
    value: Any
    output: str
    prompt: Prompt


def simulate(
    factory: Callable[..., Prompt],
    script: Iterable[Key | str],
    *,
    settings: Settings | None = None,
    **kwargs: Any,
) -> Simulation:
    """
    Build a prompt with *factory*, feed it *script* and run it.

    Output goes to an in-memory buffer that is returned with the value.
    """
    output = io.StringIO()
    prompt = factory(
        input=ScriptedInput(script),
        output=output,
        settings=settings if settings is not None else scripted_settings(),
        **kwargs,
    )
    value = prompt.run()
    return Simulation(value=value, output=output.getvalue(), prompt=prompt)
