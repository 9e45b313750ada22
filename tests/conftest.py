"""Shared pytest fixtures for promptline tests."""

import io
import logging

import pytest

from promptline.config import Settings, reset_settings
from promptline.testing import TTYBuffer, scripted_settings


@pytest.fixture
def settings() -> Settings:
    """Interactive settings without colors, with Unicode glyphs."""
    return scripted_settings()


@pytest.fixture
def ascii_settings() -> Settings:
    return scripted_settings(unicode=False)


@pytest.fixture
def output() -> io.StringIO:
    """Plain (non-terminal) output buffer."""
    return io.StringIO()


@pytest.fixture
def tty_output() -> TTYBuffer:
    """Output buffer that reports itself as a TTY."""
    return TTYBuffer()


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Reset the default settings and the package logger around each test."""
    logger = logging.getLogger("promptline")
    handlers = list(logger.handlers)
    level = logger.level
    reset_settings()
    yield
    reset_settings()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.disabled = False
