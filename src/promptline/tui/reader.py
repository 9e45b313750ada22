"""
Raw-mode key decoder.

``KeyDecoder.read()`` returns exactly one logical key per call.  A lone ESC
byte is ambiguous (it also starts every arrow-key sequence), so after an ESC
the decoder waits up to ``escape_timeout`` seconds for continuation bytes
before deciding the user pressed Escape.
"""

from __future__ import annotations

import os
import select
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, TextIO

from promptline.logging import get_logger
from promptline.tui.keys import Key, parse_key

try:
    import termios
    import tty
except ImportError:  # pragma: no cover - Windows
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

logger = get_logger("tui.reader")

DEFAULT_ESCAPE_TIMEOUT = 0.05

# Upper bound on CSI parameter bytes; longer input is treated as garbage.
_MAX_CSI_LENGTH = 32


class KeySource(Protocol):
    """Anything the prompt engine can pull keys from."""

    def read(self) -> Key: ...


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """
    Put *fd* into raw, no-echo mode for the duration of the block.

    The previous terminal attributes are restored unconditionally on exit,
    including when the block raises.  Descriptors that are not terminals
    (pipes, files) are left untouched.
    """
    if termios is None or not os.isatty(fd):
        yield
        return

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd, when=termios.TCSANOW)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _utf8_length(lead: int) -> int:
    """Total byte length of a UTF-8 sequence starting with *lead*."""
    if lead < 0x80:
        return 1
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    return 1


class KeyDecoder:
    """
    Reads one key at a time from a file descriptor.

    Parameters
    ----------
    stream:
        Input stream, defaults to ``sys.stdin``.  Must expose ``fileno()``.
    escape_timeout:
        Seconds to wait after ESC for the rest of an escape sequence.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self.escape_timeout = escape_timeout
        self._pending = bytearray()

    def fileno(self) -> int:
        return self._stream.fileno()

    def read(self) -> Key:
        """
        Block until one complete key has been read and return it.

        Raises
        ------
        EOFError
            If the input is exhausted before a key arrives.
        """
        fd = self.fileno()
        with raw_mode(fd):
            data = self._read_sequence(fd)
        return parse_key(data)

    # ------------------------------------------------------------------
    # Sequence assembly
    # ------------------------------------------------------------------

    def _read_sequence(self, fd: int) -> bytes:
        first = self._read_byte(fd, None)
        if first is None:
            raise EOFError("input stream closed")

        if first != 0x1b:
            return self._read_utf8(fd, first)

        second = self._read_byte(fd, self.escape_timeout)
        if second is None:
            return b"\x1b"

        if second == ord("["):
            return self._read_csi(fd)

        if second == ord("O"):
            final = self._read_byte(fd, self.escape_timeout)
            return b"\x1bO" if final is None else bytes((0x1b, ord("O"), final))

        if second == 0x1b:
            # ESC ESC: report the first, keep the second for the next read
            self._pending.append(second)
            return b"\x1b"

        return b"\x1b" + self._read_utf8(fd, second)

    def _read_csi(self, fd: int) -> bytes:
        seq = bytearray(b"\x1b[")
        while len(seq) < _MAX_CSI_LENGTH:
            byte = self._read_byte(fd, self.escape_timeout)
            if byte is None:
                logger.debug("Incomplete CSI sequence: %r", bytes(seq))
                break
            seq.append(byte)
            if 0x40 <= byte <= 0x7e:
                break
        return bytes(seq)

    def _read_utf8(self, fd: int, lead: int) -> bytes:
        buf = bytearray((lead,))
        for _ in range(_utf8_length(lead) - 1):
            byte = self._read_byte(fd, self.escape_timeout)
            if byte is None:
                break
            buf.append(byte)
        return bytes(buf)

    # ------------------------------------------------------------------
    # Byte level
    # ------------------------------------------------------------------

    def _read_byte(self, fd: int, timeout: float | None) -> int | None:
        """
        Read a single byte, waiting at most *timeout* seconds.

        ``None`` timeout blocks indefinitely.  Returns ``None`` on timeout
        or end of file.
        """
        if self._pending:
            return self._pending.pop(0)

        if timeout is not None:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None

        data = os.read(fd, 1)
        if not data:
            return None
        return data[0]
