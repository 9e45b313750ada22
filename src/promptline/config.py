"""
Process-level settings for promptline.

Settings are an explicit value: build one (programmatically, from YAML, or
from ``PROMPTLINE_*`` environment variables) and hand it to prompts.  Prompts
constructed without one use the process default returned by
:func:`get_settings`, which :func:`configure` and :func:`reset_settings`
replace.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, TextIO, Union

import yaml

from promptline.errors import ConfigError
from promptline.logging import get_logger
from promptline.tui import environment
from promptline.tui.keybindings import Action, KeybindingsManager
from promptline.tui.reader import DEFAULT_ESCAPE_TIMEOUT

logger = get_logger("config")

Auto = Literal["auto"]
Toggle = Union[bool, Auto]

DEFAULT_CONFIG_PATH = Path.home() / ".promptline" / "config.yaml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_toggle(value: Any, name: str) -> Toggle:
    """Coerce YAML/env input into ``True``, ``False`` or ``"auto"``."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "auto":
        return "auto"
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name}: expected true, false or 'auto', got {value!r}")


@dataclass
class Settings:
    """
    Terminal and input configuration shared by every prompt.

    Example YAML:
        ci_mode: auto
        unicode: auto
        color: auto
        escape_timeout: 0.05
        with_guide: true
        aliases:
          ctrl+n: down
          ctrl+p: up
    """

    ci_mode: Toggle = False  # True, False or "auto" (non-TTY stdin / CI env)
    unicode: Toggle = "auto"  # Unicode glyphs vs ASCII fallbacks
    color: Toggle = "auto"  # Honours NO_COLOR / FORCE_COLOR when "auto"
    escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT  # Seconds to wait after ESC
    with_guide: bool = True  # Draw the vertical guide bar
    aliases: dict[str, Any] = field(default_factory=dict)  # Merged over defaults

    def __post_init__(self) -> None:
        if self.escape_timeout < 0:
            raise ConfigError("escape_timeout must be non-negative")
        self._keybindings: KeybindingsManager | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        """Create settings from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.debug("Ignoring unknown settings: %s", sorted(unknown))

        aliases = data.get("aliases") or {}
        if not isinstance(aliases, Mapping):
            raise ConfigError("aliases must be a mapping of key to action")
        try:
            KeybindingsManager(aliases)
        except ValueError as exc:
            raise ConfigError(f"aliases: {exc}") from exc

        try:
            escape_timeout = float(data.get("escape_timeout", DEFAULT_ESCAPE_TIMEOUT))
        except (TypeError, ValueError):
            raise ConfigError(
                f"escape_timeout: expected a number, got {data.get('escape_timeout')!r}"
            ) from None

        return cls(
            ci_mode=_parse_toggle(data.get("ci_mode", False), "ci_mode"),
            unicode=_parse_toggle(data.get("unicode", "auto"), "unicode"),
            color=_parse_toggle(data.get("color", "auto"), "color"),
            escape_timeout=escape_timeout,
            with_guide=bool(data.get("with_guide", True)),
            aliases=dict(aliases),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> Settings:
        """Load settings from a YAML file."""
        logger.debug("Loading settings from %s", path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, content: str) -> Settings:
        """Load settings from a YAML string."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}") from exc
        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data: Any) -> Settings:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("settings file must contain a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, base: Settings | None = None) -> Settings:
        """
        Apply ``PROMPTLINE_*`` environment variables on top of *base*.

        Recognised variables: ``PROMPTLINE_CI_MODE``, ``PROMPTLINE_UNICODE``,
        ``PROMPTLINE_COLOR``, ``PROMPTLINE_ESCAPE_TIMEOUT`` and
        ``PROMPTLINE_WITH_GUIDE``.
        """
        env = os.environ if env is None else env
        data = base.to_dict() if base is not None else {}
        for name in ("ci_mode", "unicode", "color", "escape_timeout", "with_guide"):
            value = env.get(f"PROMPTLINE_{name.upper()}")
            if value is not None:
                data[name] = value
        if "with_guide" in data and isinstance(data["with_guide"], str):
            data["with_guide"] = _parse_toggle(data["with_guide"], "with_guide") is not False
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: str | Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
        """
        Load settings from *path* (or ``~/.promptline/config.yaml`` if it
        exists), then apply environment overrides.
        """
        config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        base = None
        if config_path.is_file():
            base = cls.from_yaml(config_path)
        elif path is not None:
            raise ConfigError(f"Settings file not found: {config_path}")
        return cls.from_env(env, base=base)

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "ci_mode": self.ci_mode,
            "unicode": self.unicode,
            "color": self.color,
            "escape_timeout": self.escape_timeout,
            "with_guide": self.with_guide,
            "aliases": {
                alias: action.value if isinstance(action, Action) else action
                for alias, action in self.aliases.items()
            },
        }

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @property
    def keybindings(self) -> KeybindingsManager:
        """Alias resolver built from :attr:`aliases` (created lazily)."""
        if self._keybindings is None:
            self._keybindings = KeybindingsManager(self.aliases)
        return self._keybindings

    def ci_active(self, stdin: TextIO | None = None, env: Mapping[str, str] | None = None) -> bool:
        """Whether prompts should skip interaction and auto-submit."""
        if self.ci_mode == "auto":
            stdin = sys.stdin if stdin is None else stdin
            return not environment.is_tty(stdin) or environment.is_ci(env)
        return bool(self.ci_mode)

    def use_color(self, output: TextIO | None = None, env: Mapping[str, str] | None = None) -> bool:
        if self.color == "auto":
            return environment.colors_supported(output, env)
        return bool(self.color)

    def use_unicode(self, output: TextIO | None = None, env: Mapping[str, str] | None = None) -> bool:
        if self.unicode == "auto":
            return environment.unicode_supported(output, env)
        return bool(self.unicode)


# ---------------------------------------------------------------------------
# Process default
# ---------------------------------------------------------------------------

_default: Settings | None = None
_default_lock = threading.Lock()


def get_settings() -> Settings:
    """Return the process default settings, creating them from the environment."""
    global _default
    with _default_lock:
        if _default is None:
            _default = Settings.from_env()
        return _default


def configure(settings: Settings | None = None, **overrides: Any) -> Settings:
    """
    Replace the process default.

    Either pass a complete :class:`Settings`, or keyword overrides that are
    applied on top of the current default.  ``aliases`` overrides merge into
    the existing custom aliases.
    """
    global _default
    with _default_lock:
        if settings is None:
            current = _default if _default is not None else Settings.from_env()
            data = current.to_dict()
            aliases = dict(data.get("aliases") or {})
            aliases.update(overrides.pop("aliases", None) or {})
            data.update(overrides)
            data["aliases"] = aliases
            settings = Settings.from_dict(data)
        _default = settings
        return settings


def reset_settings() -> None:
    """Forget the process default so the next :func:`get_settings` rebuilds it."""
    global _default
    with _default_lock:
        _default = None
