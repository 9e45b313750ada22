"""
Key-to-action resolution.

Maps decoded keys onto the small, closed set of semantic actions the prompt
engine understands.  Custom aliases are merged over the defaults; they can
add or rebind keys but never drop the default table as a whole.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from promptline.tui.keys import Key, is_printable_char


class Action(str, Enum):
    """Semantic actions a key can resolve to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    ENTER = "enter"
    CANCEL = "cancel"


# ---------------------------------------------------------------------------
# Default alias table
# ---------------------------------------------------------------------------

DEFAULT_ALIASES: dict[str, Action] = {
    # vim
    "k": Action.UP,
    "j": Action.DOWN,
    "h": Action.LEFT,
    "l": Action.RIGHT,
    # arrows
    "up": Action.UP,
    "down": Action.DOWN,
    "left": Action.LEFT,
    "right": Action.RIGHT,
    # control
    "enter": Action.ENTER,
    "space": Action.SPACE,
    "escape": Action.CANCEL,
    "ctrl+c": Action.CANCEL,
}

_BACKSPACE_RAW = ("\x7f", "\b")

# Keys that always cancel, as descriptors and as raw input
_CANCEL_DESCRIPTORS = frozenset({"escape", "ctrl+c"})
_CANCEL_RAW = frozenset({"\x1b", "\x03"})


# ---------------------------------------------------------------------------
# Alias descriptors
# ---------------------------------------------------------------------------

def _is_raw_sequence(alias: str) -> bool:
    """An alias containing control characters is a raw input sequence."""
    return any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in alias)


def _normalise_base(base: str) -> str:
    # Single characters stay case-sensitive: "K" is not "k".
    return base if len(base) == 1 else base.lower()


def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Canonical spelling of an alias such as ``"Ctrl+Shift+Tab"``.

    Modifiers and named keys are lower-cased, modifiers sorted.  A single
    character keeps its case unless Ctrl is held.

    >>> _normalise_key_descriptor("Shift+Ctrl+Tab")
    'ctrl+shift+tab'
    """
    if descriptor == "+":
        return "+"
    parts = [p.strip() for p in descriptor.split("+")]
    modifiers = sorted(p.lower() for p in parts[:-1])
    base = _normalise_base(parts[-1]) if parts else ""
    if "ctrl" in modifiers:
        # Terminals cannot distinguish Ctrl+N from Ctrl+n.
        base = base.lower()
    return "+".join(modifiers + [base])


def _key_to_descriptor(key: Key) -> str:
    """
    Descriptor for *key* in the same spelling aliases are normalised to.

    Examples
    --------
    >>> _key_to_descriptor(Key(name="ctrl+c", char="c", ctrl=True))
    'ctrl+c'
    >>> _key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    modifiers: list[str] = []
    if key.ctrl:
        modifiers.append("ctrl")
    if key.alt:
        modifiers.append("alt")
    if key.shift:
        modifiers.append("shift")

    base = key.name
    if len(base) > 1 and "+" in base:
        base = base.rsplit("+", 1)[-1]

    return "+".join(sorted(modifiers) + [_normalise_base(base)])


def _is_cancel_alias(alias: str) -> bool:
    if _is_raw_sequence(alias):
        return alias in _CANCEL_RAW
    return _normalise_key_descriptor(alias) in _CANCEL_DESCRIPTORS


def _coerce_action(value: Action | str) -> Action:
    if isinstance(value, Action):
        return value
    try:
        return Action(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown action {value!r}; expected one of "
            f"{', '.join(a.value for a in Action)}"
        ) from None


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Resolves keys to :class:`Action` values.

    Parameters
    ----------
    aliases:
        Extra aliases merged over :data:`DEFAULT_ALIASES`.  Keys are either
        descriptors (``"ctrl+n"``, ``"w"``) or raw input sequences
        (``"\\x1b[A"``); values are :class:`Action` members or their names.
        A value of ``None`` removes that single alias.  Escape and Ctrl+C
        always cancel; unbinding or rebinding them raises ``ValueError``.
    """

    def __init__(self, aliases: Mapping[str, Action | str | None] | None = None) -> None:
        merged: dict[str, Action] = dict(DEFAULT_ALIASES)
        for alias, action in (aliases or {}).items():
            if _is_cancel_alias(alias) and (action is None or _coerce_action(action) is not Action.CANCEL):
                raise ValueError(f"{alias!r} always cancels and cannot be unbound or rebound")
            if action is None:
                merged.pop(alias, None)
            else:
                merged[alias] = _coerce_action(action)
        self._aliases = merged

        self._raw: dict[str, Action] = {}
        self._descriptors: dict[str, Action] = {}
        for alias, action in merged.items():
            if _is_raw_sequence(alias):
                self._raw[alias] = action
            else:
                self._descriptors[_normalise_key_descriptor(alias)] = action

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    @property
    def aliases(self) -> dict[str, Action]:
        """The merged alias table."""
        return dict(self._aliases)

    def resolve(self, key: Key) -> Action | None:
        """Return the action bound to *key*, or ``None``."""
        if key.raw and key.raw in self._raw:
            return self._raw[key.raw]
        return self._descriptors.get(_key_to_descriptor(key))

    def get_keys(self, action: Action | str) -> list[str]:
        """Return all alias strings bound to *action*."""
        action = _coerce_action(action)
        return [alias for alias, bound in self._aliases.items() if bound is action]

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @staticmethod
    def is_printable(key: Key) -> bool:
        """``True`` for a single printable character (space included)."""
        if key.ctrl or key.alt:
            return False
        return is_printable_char(key.raw)

    @staticmethod
    def is_backspace(key: Key) -> bool:
        """``True`` for Backspace / DEL."""
        return key.raw in _BACKSPACE_RAW or (key.name == "backspace" and not key.alt)
