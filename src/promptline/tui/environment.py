"""
Terminal and environment detection.

All checks degrade to ``False`` (or a default size) rather than raising, so
an unusual terminal never breaks a prompt.
"""

from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Mapping
from typing import TextIO

# Environment variables whose presence marks a CI runner.
CI_MARKERS: tuple[str, ...] = (
    "BUILD_NUMBER",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
    "JENKINS_URL",
    "TEAMCITY_VERSION",
    "BUILDKITE",
)


def _env(env: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if env is None else env


def is_windows() -> bool:
    """Return ``True`` on native Windows."""
    return sys.platform.startswith("win")


def is_tty(stream: object | None = None) -> bool:
    """Return ``True`` if *stream* (default ``sys.stdout``) is a terminal."""
    stream = sys.stdout if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def is_ci(env: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when running under a known CI system."""
    env = _env(env)
    if env.get("CI", "").lower() == "true":
        return True
    if env.get("CONTINUOUS_INTEGRATION", "").lower() == "true":
        return True
    return any(marker in env for marker in CI_MARKERS)


def is_dumb_terminal(env: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` for ``TERM=dumb``."""
    return _env(env).get("TERM") == "dumb"


def colors_supported(
    stream: TextIO | None = None,
    env: Mapping[str, str] | None = None,
) -> bool:
    """
    Decide whether SGR colors should be written to *stream*.

    ``NO_COLOR`` always wins, then ``FORCE_COLOR``; otherwise colors are
    used only on a real, non-dumb terminal.
    """
    env = _env(env)
    if env.get("NO_COLOR"):
        return False
    force = env.get("FORCE_COLOR")
    if force is not None and force not in ("0", "false"):
        return True
    if not is_tty(stream):
        return False
    return not is_dumb_terminal(env)


def unicode_supported(
    stream: TextIO | None = None,
    env: Mapping[str, str] | None = None,
) -> bool:
    """
    Decide whether box-drawing and geometric glyphs can be printed.

    Requires a terminal that is not dumb and an output encoding that is
    some flavour of UTF.
    """
    env = _env(env)
    stream = sys.stdout if stream is None else stream
    if not is_tty(stream) or is_dumb_terminal(env):
        return False
    encoding = (getattr(stream, "encoding", None) or "").lower()
    if encoding and "utf" not in encoding:
        return False
    if is_windows():
        return "WT_SESSION" in env or "TERM_PROGRAM" in env
    return True


def columns(stream: TextIO | None = None, default: int = 80) -> int:
    """Terminal width in columns, or *default* when it cannot be detected."""
    if not is_tty(stream):
        return default
    size = shutil.get_terminal_size((default, 24))
    return size.columns if size.columns > 0 else default


def rows(stream: TextIO | None = None, default: int = 24) -> int:
    """Terminal height in rows, or *default* when it cannot be detected."""
    if not is_tty(stream):
        return default
    size = shutil.get_terminal_size((80, default))
    return size.lines if size.lines > 0 else default
