"""
Terminal layer for promptline.

Key decoding, action resolution, ANSI output primitives, glyph tables and
environment detection used by the prompt engine.
"""

from __future__ import annotations

from promptline.tui.colors import Colors
from promptline.tui.keybindings import DEFAULT_ALIASES, Action, KeybindingsManager
from promptline.tui.keys import Key, parse_key
from promptline.tui.reader import KeyDecoder, KeySource, raw_mode
from promptline.tui.symbols import ASCII_SYMBOLS, UNICODE_SYMBOLS, Symbols, get_symbols

__all__ = [
    # Keys
    "Key",
    "parse_key",
    "KeyDecoder",
    "KeySource",
    "raw_mode",
    # Actions
    "Action",
    "KeybindingsManager",
    "DEFAULT_ALIASES",
    # Output
    "Colors",
    "Symbols",
    "UNICODE_SYMBOLS",
    "ASCII_SYMBOLS",
    "get_symbols",
]
