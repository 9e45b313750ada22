"""Tests for the raw-mode key decoder."""

import io
import os

import pytest

from promptline.tui.reader import KeyDecoder, raw_mode


@pytest.fixture
def pipe():
    """A (reader stream, write fd) pair backed by an OS pipe."""
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "rb", buffering=0)
    state = {"write_fd": write_fd}
    yield reader, state
    reader.close()
    if state["write_fd"] is not None:
        os.close(state["write_fd"])


def _decoder(reader, timeout: float = 0.02) -> KeyDecoder:
    return KeyDecoder(reader, escape_timeout=timeout)


class TestKeyDecoder:
    """Tests for KeyDecoder.read."""

    def test_plain_bytes_one_key_per_read(self, pipe) -> None:
        """Each read returns exactly one key."""
        reader, state = pipe
        os.write(state["write_fd"], b"ab")
        decoder = _decoder(reader)

        assert decoder.read().name == "a"
        assert decoder.read().name == "b"

    def test_lone_escape_after_timeout(self, pipe) -> None:
        """ESC with nothing following within the timeout is the escape key."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1b")

        key = _decoder(reader).read()

        assert key.name == "escape"
        assert key.raw == "\x1b"

    def test_csi_sequence_is_one_key(self, pipe) -> None:
        """An arrow-key sequence is assembled into a single key."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1b[Ax")
        decoder = _decoder(reader)

        assert decoder.read().name == "up"
        assert decoder.read().name == "x"

    def test_csi_with_parameters(self, pipe) -> None:
        """Parameter bytes are collected up to the final byte."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1b[1;5C\x1b[3~")
        decoder = _decoder(reader)

        first = decoder.read()
        assert first.name == "right"
        assert first.ctrl is True
        assert decoder.read().name == "delete"

    def test_ss3_sequence(self, pipe) -> None:
        """ESC O <final> is read as one key."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1bOB")

        assert _decoder(reader).read().name == "down"

    def test_utf8_continuation_bytes(self, pipe) -> None:
        """A multi-byte character arrives as one key."""
        reader, state = pipe
        os.write(state["write_fd"], "é€".encode())
        decoder = _decoder(reader)

        assert decoder.read().name == "é"
        assert decoder.read().name == "€"

    def test_alt_character(self, pipe) -> None:
        """ESC followed by a printable byte is alt+char."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1bf")

        key = _decoder(reader).read()

        assert key.name == "alt+f"
        assert key.alt is True

    def test_double_escape_keeps_second(self, pipe) -> None:
        """ESC ESC yields escape, and the second ESC starts the next key."""
        reader, state = pipe
        os.write(state["write_fd"], b"\x1b\x1b[A")
        decoder = _decoder(reader)

        assert decoder.read().name == "escape"
        assert decoder.read().name == "up"

    def test_eof_raises(self, pipe) -> None:
        """A closed input raises EOFError."""
        reader, state = pipe
        os.close(state["write_fd"])
        state["write_fd"] = None

        with pytest.raises(EOFError):
            _decoder(reader).read()


class TestRawMode:
    """Tests for the raw_mode context manager."""

    def test_non_tty_is_untouched(self, pipe) -> None:
        """A pipe is not a terminal, so raw_mode is a no-op."""
        reader, _ = pipe

        with raw_mode(reader.fileno()):
            pass

    def test_pty_raw_then_restored(self) -> None:
        """On a terminal, canonical mode and echo are off inside the block and back after a raise."""
        termios = pytest.importorskip("termios")
        pty = pytest.importorskip("pty")
        master, slave = pty.openpty()
        try:
            saved = termios.tcgetattr(slave)
            assert saved[3] & termios.ICANON and saved[3] & termios.ECHO

            with pytest.raises(RuntimeError):
                with raw_mode(slave):
                    lflag = termios.tcgetattr(slave)[3]
                    assert lflag & termios.ICANON == 0
                    assert lflag & termios.ECHO == 0
                    raise RuntimeError("boom")

            assert termios.tcgetattr(slave) == saved
        finally:
            os.close(slave)
            os.close(master)

    def test_decoder_requires_fileno(self) -> None:
        """Streams without a descriptor cannot be decoded."""
        decoder = KeyDecoder(io.StringIO())

        with pytest.raises(io.UnsupportedOperation):
            decoder.read()
