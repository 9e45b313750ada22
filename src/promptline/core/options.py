"""
Option normalisation for list-based prompts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Option:
    """
    A single choice in a list prompt.

    Attributes
    ----------
    value:
        Returned when the option is chosen.  Selection membership is
        decided by equality on this field.
    label:
        Display text; defaults to ``str(value)``.
    hint:
        Optional secondary text shown for the highlighted option.
    disabled:
        Disabled options are rendered but can never hold the cursor.
    """

    value: Any
    label: str = ""
    hint: str | None = None
    disabled: bool = False

    def __post_init__(self) -> None:
        if not self.label:
            object.__setattr__(self, "label", str(self.value))


def normalize_option(raw: Any) -> Option:
    """
    Convert one raw choice into an :class:`Option`.

    Accepts an :class:`Option`, a mapping with ``value``/``label``/``hint``/
    ``disabled`` keys, a ``(value, label)`` tuple, or any plain value.
    """
    if isinstance(raw, Option):
        return raw
    if isinstance(raw, Mapping):
        if "value" not in raw:
            raise ValueError(f"option mapping needs a 'value' key: {raw!r}")
        return Option(
            value=raw["value"],
            label=str(raw.get("label") or ""),
            hint=raw.get("hint"),
            disabled=bool(raw.get("disabled", False)),
        )
    if isinstance(raw, tuple) and len(raw) == 2:
        return Option(value=raw[0], label=str(raw[1]))
    return Option(value=raw)


def normalize_options(raw: Iterable[Any]) -> list[Option]:
    """Normalise every entry of *raw*."""
    return [normalize_option(item) for item in raw]


def first_enabled(options: Sequence[Option], initial_value: Any = None) -> int:
    """
    Index where the cursor should start.

    Prefers the option equal to *initial_value* when it is enabled, then the
    first enabled option, then ``0`` when everything is disabled.
    """
    if initial_value is not None:
        for idx, opt in enumerate(options):
            if opt.value == initial_value and not opt.disabled:
                return idx
    for idx, opt in enumerate(options):
        if not opt.disabled:
            return idx
    return 0
