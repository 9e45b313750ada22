"""Tests for key parsing."""

from promptline.tui.keys import KEY_ENTER, Key, parse_key


class TestParseKey:
    """Tests for parse_key."""

    def test_printable_character(self) -> None:
        """A plain letter becomes a key named after itself."""
        key = parse_key(b"a")

        assert key.name == "a"
        assert key.char == "a"
        assert key.raw == "a"

    def test_multibyte_utf8_character(self) -> None:
        """A multi-byte UTF-8 character is a single printable key."""
        key = parse_key("é".encode())

        assert key.name == "é"
        assert key.raw == "é"

    def test_enter_and_newline(self) -> None:
        """Both CR and LF decode to enter."""
        assert parse_key(b"\r").name == "enter"
        assert parse_key(b"\n").name == "enter"
        assert parse_key(b"\n").raw == "\n"

    def test_backspace_variants(self) -> None:
        """DEL and BS both decode to backspace."""
        assert parse_key(b"\x7f").name == "backspace"
        assert parse_key(b"\x08").name == "backspace"

    def test_ctrl_letter(self) -> None:
        """Control bytes map to ctrl+letter."""
        key = parse_key(b"\x03")

        assert key.name == "ctrl+c"
        assert key.ctrl is True
        assert key.raw == "\x03"

    def test_escape_alone(self) -> None:
        """A lone ESC byte is the escape key."""
        assert parse_key(b"\x1b").name == "escape"

    def test_arrow_keys(self) -> None:
        """CSI arrows keep their raw sequence."""
        up = parse_key(b"\x1b[A")

        assert up.name == "up"
        assert up.raw == "\x1b[A"
        assert up.is_escape_sequence is True
        assert parse_key(b"\x1b[B").name == "down"
        assert parse_key(b"\x1b[C").name == "right"
        assert parse_key(b"\x1b[D").name == "left"

    def test_ss3_arrows_and_function_keys(self) -> None:
        """Application-mode sequences decode like their CSI counterparts."""
        assert parse_key(b"\x1bOA").name == "up"
        assert parse_key(b"\x1bOP").name == "f1"

    def test_tilde_sequences(self) -> None:
        """CSI n ~ covers delete, paging and function keys."""
        assert parse_key(b"\x1b[3~").name == "delete"
        assert parse_key(b"\x1b[5~").name == "page_up"
        assert parse_key(b"\x1b[6~").name == "page_down"
        assert parse_key(b"\x1b[15~").name == "f5"

    def test_home_end(self) -> None:
        """Both the letter and tilde forms of home/end are recognised."""
        assert parse_key(b"\x1b[H").name == "home"
        assert parse_key(b"\x1b[1~").name == "home"
        assert parse_key(b"\x1b[F").name == "end"
        assert parse_key(b"\x1b[4~").name == "end"

    def test_shift_tab(self) -> None:
        """CSI Z is tab with shift held."""
        key = parse_key(b"\x1b[Z")

        assert key.name == "tab"
        assert key.shift is True

    def test_xterm_modifiers(self) -> None:
        """The ;N suffix sets modifier flags."""
        key = parse_key(b"\x1b[1;5C")

        assert key.name == "right"
        assert key.ctrl is True
        assert key.alt is False
        assert parse_key(b"\x1b[1;2A").shift is True
        assert parse_key(b"\x1b[3;3~").alt is True

    def test_alt_character(self) -> None:
        """ESC followed by a character is alt+character."""
        key = parse_key(b"\x1bx")

        assert key.name == "alt+x"
        assert key.alt is True

    def test_unknown_sequence_keeps_raw(self) -> None:
        """Unrecognised sequences are unknown but still carry their bytes."""
        key = parse_key(b"\x1b[99~")

        assert key.name == "unknown"
        assert key.raw == "\x1b[99~"

    def test_empty_input(self) -> None:
        """No bytes at all is an unknown key."""
        assert parse_key(b"").name == "unknown"

    def test_key_constants_are_hashable(self) -> None:
        """Keys are frozen values usable in sets and as dict keys."""
        assert {KEY_ENTER, Key(name="enter", char="\r", raw="\r")} == {KEY_ENTER}
