"""
Key parsing for terminal input.

Translates the raw bytes of one key press into a structured ``Key`` that the
action resolver and widgets can dispatch on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from promptline.logging import get_logger

logger = get_logger("tui.keys")


@dataclass(frozen=True)
class Key:
    """
    One decoded key press.

    ``raw`` is the input exactly as read (``"\\x1b[A"`` for Up).  Printable
    keys use the character itself as ``name`` and ``char``; special keys get
    a symbolic ``name`` such as ``"enter"`` or ``"page_up"`` and an empty
    ``char``.  Ctrl+letter keeps the letter in ``char``.  Shift is only
    reported where the terminal encodes it (Shift+Tab, xterm modifiers).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    raw: str = ""

    @property
    def is_escape_sequence(self) -> bool:
        """``True`` for multi-byte sequences introduced by ESC."""
        return len(self.raw) > 1 and self.raw.startswith("\x1b")


# Named keys

KEY_ENTER = Key(name="enter", char="\r", raw="\r")
KEY_TAB = Key(name="tab", char="\t", raw="\t")
KEY_ESCAPE = Key(name="escape", raw="\x1b")
KEY_BACKSPACE = Key(name="backspace", raw="\x7f")
KEY_DELETE = Key(name="delete", raw="\x1b[3~")
KEY_INSERT = Key(name="insert", raw="\x1b[2~")

KEY_UP = Key(name="up", raw="\x1b[A")
KEY_DOWN = Key(name="down", raw="\x1b[B")
KEY_RIGHT = Key(name="right", raw="\x1b[C")
KEY_LEFT = Key(name="left", raw="\x1b[D")

KEY_HOME = Key(name="home", raw="\x1b[H")
KEY_END = Key(name="end", raw="\x1b[F")
KEY_PAGE_UP = Key(name="page_up", raw="\x1b[5~")
KEY_PAGE_DOWN = Key(name="page_down", raw="\x1b[6~")

KEY_SHIFT_TAB = Key(name="tab", char="\t", shift=True, raw="\x1b[Z")
KEY_SPACE = Key(name="space", char=" ", raw=" ")
KEY_CTRL_C = Key(name="ctrl+c", char="c", ctrl=True, raw="\x03")
KEY_CTRL_D = Key(name="ctrl+d", char="d", ctrl=True, raw="\x04")

KEY_UNKNOWN = Key(name="unknown")

_F_KEYS = {n: Key(name=f"f{n}") for n in range(1, 13)}


_CSI_SIMPLE: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": KEY_SHIFT_TAB,
}

# CSI <n> ~  (delete is \x1b[3~; 7/8 are the rxvt home/end)
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: KEY_INSERT,
    3: KEY_DELETE,
    4: KEY_END,
    5: KEY_PAGE_UP,
    6: KEY_PAGE_DOWN,
    7: KEY_HOME,
    8: KEY_END,
}
# F1-F12; the gaps at 16 and 22 are historical
_CSI_TILDE.update(
    zip((11, 12, 13, 14, 15, 17, 18, 19, 20, 21, 23, 24), (_F_KEYS[n] for n in range(1, 13)))
)

# ESC O <final>, sent by terminals in application cursor mode
_SS3: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "P": _F_KEYS[1],
    "Q": _F_KEYS[2],
    "R": _F_KEYS[3],
    "S": _F_KEYS[4],
    "H": KEY_HOME,
    "F": KEY_END,
}


def _modifier_flags(code: int) -> tuple[bool, bool, bool]:
    """``(shift, alt, ctrl)`` from an xterm modifier parameter (1 = none)."""
    bits = code - 1
    return bool(bits & 1), bool(bits & 2), bool(bits & 4)


def parse_key(data: bytes) -> Key:
    """
    Decode the bytes of one key press.

    *data* is what :class:`~promptline.tui.reader.KeyDecoder` assembled for
    a single key: a (possibly multi-byte) character, a control byte, or an
    ESC-prefixed CSI/SS3/Alt sequence with optional xterm modifiers
    (``\\x1b[1;5C`` is Ctrl+Right).  Anything unrecognised becomes
    ``KEY_UNKNOWN``.  The result always carries *data* decoded in ``raw``.
    """
    if not data:
        return KEY_UNKNOWN

    raw = data.decode("utf-8", errors="replace")
    key = _parse(data, raw)
    if key.name == "unknown":
        logger.debug("Unrecognised key sequence: %r", data)
    if key.raw != raw:
        key = replace(key, raw=raw)
    return key


# Control bytes with a name of their own; the rest of 0x01-0x1a are ctrl+letter
_CONTROL: dict[int, Key] = {
    0x0D: KEY_ENTER,
    0x0A: KEY_ENTER,
    0x09: KEY_TAB,
    0x7F: KEY_BACKSPACE,
    0x08: KEY_BACKSPACE,
    0x00: Key(name="ctrl+space", char=" ", ctrl=True),
    0x1C: Key(name="ctrl+\\", char="\\", ctrl=True),
    0x1D: Key(name="ctrl+]", char="]", ctrl=True),
    0x1E: Key(name="ctrl+^", char="^", ctrl=True),
    0x1F: Key(name="ctrl+_", char="_", ctrl=True),
}

# Parameters and final byte of a CSI sequence: [number][;modifier]final
_CSI_RE = re.compile(r"(\d*)(?:;(\d+))?([~A-Za-z])")


def is_printable_char(ch: str) -> bool:
    """
    ``True`` for one code point at or above space, DEL excluded.

    Format characters such as the zero-width joiner count, so they reach
    the text buffer and join the cluster being typed.
    """
    return len(ch) == 1 and ord(ch) >= 0x20 and ch != "\x7f"


def _ctrl_letter(code: int, alt: bool = False) -> Key:
    letter = chr(code + 96)
    return Key(name=f"ctrl+{letter}", char=letter, ctrl=True, alt=alt)


def _parse(data: bytes, raw: str) -> Key:
    if data[:1] == b"\x1b":
        return _parse_escape(raw[1:])

    if len(data) == 1:
        byte = data[0]
        if byte in _CONTROL:
            return _CONTROL[byte]
        if 1 <= byte <= 26:
            return _ctrl_letter(byte)

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN
    if ch == " ":
        return KEY_SPACE
    if is_printable_char(ch):
        return Key(name=ch, char=ch)
    return KEY_UNKNOWN


def _parse_escape(body: str) -> Key:
    """Decode what follows an ESC byte."""
    if not body:
        return KEY_ESCAPE
    if body[0] == "[":
        return _parse_csi(body[1:])
    if body[0] == "O" and len(body) == 2:
        return _SS3.get(body[1], KEY_UNKNOWN)

    if len(body) == 1:
        if is_printable_char(body):
            return Key(name=f"alt+{body}", char=body, alt=True)
        code = ord(body)
        if 1 <= code <= 26:
            return _ctrl_letter(code, alt=True)
        if code == 0x7F:
            return Key(name="backspace", alt=True)
    return KEY_UNKNOWN


def _parse_csi(params: str) -> Key:
    """
    Decode what follows ``ESC [``.

    Either a final letter (``A`` is Up) or ``<n>~`` (``3~`` is Delete), each
    optionally carrying an xterm modifier parameter (``1;5C``, ``3;3~``).
    """
    match = _CSI_RE.fullmatch(params)
    if match is None:
        return KEY_UNKNOWN

    number, modifier, final = match.groups()
    if final == "~":
        base = _CSI_TILDE.get(int(number)) if number else None
    elif number in ("", "1"):
        base = _CSI_SIMPLE.get(final)
    else:
        base = None

    if base is None:
        return KEY_UNKNOWN
    if modifier is None:
        return base
    shift, alt, ctrl = _modifier_flags(int(modifier))
    return replace(base, shift=shift or base.shift, alt=alt, ctrl=ctrl)
