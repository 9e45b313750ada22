"""
Prompt engine.

``Prompt`` is the abstract state machine every interactive widget is built
on.  It owns the read/resolve/dispatch loop, the validation pipeline and
differential rendering; subclasses only say how keys change their value
and how a frame looks.

States move forward towards ``SUBMIT`` or ``CANCEL``.  ``ERROR`` and
``WARNING`` are the only states that fall back to ``ACTIVE``.
"""

from __future__ import annotations

import signal
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from io import StringIO
from typing import Any, TextIO, Union

from promptline.config import Settings, get_settings
from promptline.errors import PromptValidationError
from promptline.logging import get_logger
from promptline.tui import environment
from promptline.tui.ansi import clear_down, cursor_column, cursor_up, hide_cursor, show_cursor
from promptline.tui.colors import Colors
from promptline.tui.keybindings import Action
from promptline.tui.keys import Key
from promptline.tui.reader import KeyDecoder, KeySource
from promptline.tui.symbols import get_symbols

logger = get_logger("prompt")


class State(str, Enum):
    """Lifecycle of a prompt session."""

    INITIAL = "initial"
    ACTIVE = "active"
    ERROR = "error"
    WARNING = "warning"
    CANCEL = "cancel"
    SUBMIT = "submit"


# ---------------------------------------------------------------------------
# Cancellation sentinel
# ---------------------------------------------------------------------------

class _CancelType:
    """Type of :data:`CANCEL`.  There is exactly one instance."""

    _instance: _CancelType | None = None

    def __new__(cls) -> _CancelType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"

    def __eq__(self, other: object) -> bool:
        return other is self

    def __hash__(self) -> int:
        return id(self)

    def __reduce__(self) -> str:
        return "CANCEL"


CANCEL = _CancelType()


def is_cancel(value: Any) -> bool:
    """``True`` if a prompt returned the cancel sentinel."""
    return value is CANCEL


# ---------------------------------------------------------------------------
# Validation results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationWarning:
    """Returned by a validator to ask for confirmation instead of rejecting."""

    message: str


@dataclass(frozen=True)
class Passed:
    value: Any


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class Warned:
    message: str


ValidationResult = Union[Passed, Failed, Warned]
Validator = Callable[[Any], Any]
Transformer = Callable[[Any], Any]


def normalize_validation(result: Any, value: Any) -> ValidationResult:
    """
    Map whatever a validator returned onto a tagged result.

    ``None`` or an empty string pass; a string or exception fails with its
    message; a :class:`ValidationWarning` warns.
    """
    if isinstance(result, (Passed, Failed, Warned)):
        return result
    if isinstance(result, ValidationWarning):
        return Warned(result.message)
    if isinstance(result, BaseException):
        return Failed(str(result))
    if result is None or result == "" or result is False:
        return Passed(value)
    return Failed(str(result))


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key together with the action it resolved to."""

    key: Key
    action: Action | None


# ---------------------------------------------------------------------------
# Resize notification
# ---------------------------------------------------------------------------

_active_prompts: list[Prompt] = []
_previous_winch_handler: Any = None
_winch_installed = False


def _on_resize(signum: int, frame: Any) -> None:
    # Only flag; rendering happens on the next loop iteration.
    for prompt in list(_active_prompts):
        prompt._needs_redraw = True


def _can_trap_resize() -> bool:
    return (
        hasattr(signal, "SIGWINCH")
        and threading.current_thread() is threading.main_thread()
    )


def _register(prompt: Prompt) -> None:
    global _previous_winch_handler, _winch_installed
    _active_prompts.append(prompt)
    if not _winch_installed and _can_trap_resize():
        _previous_winch_handler = signal.signal(signal.SIGWINCH, _on_resize)
        _winch_installed = True


def _unregister(prompt: Prompt) -> None:
    global _previous_winch_handler, _winch_installed
    if prompt in _active_prompts:
        _active_prompts.remove(prompt)
    if not _active_prompts and _winch_installed and _can_trap_resize():
        previous = _previous_winch_handler
        signal.signal(signal.SIGWINCH, previous if previous is not None else signal.SIG_DFL)
        _previous_winch_handler = None
        _winch_installed = False


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class Prompt(ABC):
    """
    Base class for interactive prompts.

    Parameters
    ----------
    message:
        Question shown next to the state glyph.
    validate:
        Optional callable receiving the value.  See
        :func:`normalize_validation` for what it may return.
    transform:
        Optional callable applied to the value once validation passed.
    help:
        Dimmed help text shown under the message.
    output:
        Text stream frames are written to, defaults to ``sys.stdout``.
    input:
        Either a key source (anything with ``read() -> Key``, such as
        :class:`promptline.testing.ScriptedInput`) or a stream with a file
        descriptor, which is wrapped in a :class:`KeyDecoder`.
    settings:
        Settings to use instead of the process default.
    """

    def __init__(
        self,
        message: str,
        *,
        validate: Validator | None = None,
        transform: Transformer | None = None,
        help: str | None = None,
        output: TextIO | None = None,
        input: Any = None,
        settings: Settings | None = None,
    ) -> None:
        self.message = message
        self.validate = validate
        self.transform = transform
        self.help = help
        self.settings = settings if settings is not None else get_settings()
        self.output: TextIO = output if output is not None else sys.stdout
        self._input_stream = input
        self._source: KeySource | None = None

        self.state = State.INITIAL
        self.value: Any = None
        self.error_message: str | None = None
        self.warning_message: str | None = None

        self.keybindings = self.settings.keybindings
        self.colors = Colors(self.settings.use_color(self.output))
        self.symbols = get_symbols(self.settings.use_unicode(self.output))
        self._tty = environment.is_tty(self.output)

        self._prev_frame: str | None = None
        self._prev_lines = 0
        self._needs_redraw = False

    # ------------------------------------------------------------------
    # Abstract API
    # ------------------------------------------------------------------

    @abstractmethod
    def handle_input(self, key: Key, action: Action | None) -> None:
        """Apply a key that is neither cancel nor submit."""
        ...

    @abstractmethod
    def build_frame(self) -> str:
        """The frame for the current, still interactive, state."""
        ...

    def build_final_frame(self) -> str:
        """The frame left on screen after submit or cancel."""
        return self.build_frame()

    def default_value(self) -> Any:
        """Value submitted without interaction in CI mode."""
        return self.value

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return self.state in (State.SUBMIT, State.CANCEL)

    def run(self) -> Any:
        """
        Run the prompt until it is submitted or cancelled.

        Returns the (transformed) value, or :data:`CANCEL`.

        Raises
        ------
        PromptValidationError
            In CI mode, when the default value does not validate.
        EOFError
            When the input is exhausted before the prompt finishes.
        """
        if self.settings.ci_active(self._ci_stdin()):
            return self._run_ci()

        source = self.key_source()
        with self.terminal_session():
            self.render()
            self._set_state(State.ACTIVE)
            while not self.is_terminal:
                self.handle_key(source.read())
                if not self.is_terminal:
                    self.render()
            self.finalize()

        return CANCEL if self.state is State.CANCEL else self.value

    def _run_ci(self) -> Any:
        value = self.default_value()
        result = self.validate_and_transform(value)
        if isinstance(result, Warned):
            logger.debug("CI mode: auto-confirming warning %r", result.message)
            result = self._apply_transform(value)
        if isinstance(result, Failed):
            raise PromptValidationError(result.message, prompt_message=self.message)

        self.value = result.value
        self._set_state(State.SUBMIT)
        self._write(self.build_final_frame())
        return self.value

    def _ci_stdin(self) -> Any:
        if self._input_stream is not None and hasattr(self._input_stream, "fileno"):
            return self._input_stream
        return sys.stdin

    def key_source(self) -> KeySource:
        """The key source this prompt reads from."""
        if self._source is None:
            stream = self._input_stream
            # Streams expose fileno(); ready-made key sources do not.
            if stream is None or hasattr(stream, "fileno"):
                self._source = KeyDecoder(stream, escape_timeout=self.settings.escape_timeout)
            else:
                self._source = stream
        return self._source

    @contextmanager
    def terminal_session(self) -> Iterator[None]:
        """
        Hide the cursor and listen for resizes for the duration of the block.

        Both are undone on every exit path, including exceptions raised by
        widget code.
        """
        if self._tty:
            self._write(hide_cursor())
        _register(self)
        try:
            yield
        finally:
            _unregister(self)
            if self._tty:
                try:
                    self._write(show_cursor())
                except (OSError, ValueError) as exc:
                    logger.debug("Could not restore cursor: %s", exc)

    def request_redraw(self) -> None:
        """Force the next :meth:`render` to write even an unchanged frame."""
        self._needs_redraw = True

    # ------------------------------------------------------------------
    # Key dispatch
    # ------------------------------------------------------------------

    def resolve(self, key: Key) -> KeyEvent:
        return KeyEvent(key, self.keybindings.resolve(key))

    def handle_key(self, key: Key) -> None:
        """
        Dispatch one key.

        Cancel always wins.  While a warning is pending, Enter confirms it
        and any other key clears it and is then handled as usual.
        """
        if self.is_terminal:
            return

        event = self.resolve(key)
        action = event.action

        if action is Action.CANCEL:
            self._set_state(State.CANCEL)
            return

        if self.state is State.WARNING and action is Action.ENTER:
            self.confirm_warning()
            return
        self.clear_flags()

        if action is Action.ENTER:
            self.submit()
        else:
            self.handle_input(key, action)

    def clear_flags(self) -> None:
        """Drop a pending error or warning and return to ``ACTIVE``."""
        if self.state in (State.ERROR, State.WARNING):
            self.error_message = None
            self.warning_message = None
            self._set_state(State.ACTIVE)

    # ------------------------------------------------------------------
    # Validation pipeline
    # ------------------------------------------------------------------

    def submit(self) -> None:
        """Validate and transform the current value and move state on."""
        self._apply_result(self.validate_and_transform(self.value))

    def confirm_warning(self) -> None:
        """Accept the pending warning and run the transform."""
        self.warning_message = None
        self._apply_result(self._apply_transform(self.value))

    def validate_and_transform(self, value: Any) -> ValidationResult:
        """
        Run the validator and, if it passes, the transform.

        A warning is returned untransformed; the transform runs once the
        warning has been confirmed.
        """
        if self.validate is not None:
            result = normalize_validation(self.validate(value), value)
            if not isinstance(result, Passed):
                return result
            value = result.value
        return self._apply_transform(value)

    def _apply_transform(self, value: Any) -> ValidationResult:
        if self.transform is None:
            return Passed(value)
        try:
            return Passed(self.transform(value))
        except Exception as exc:
            return Failed(f"Transform failed: {exc}")

    def _apply_result(self, result: ValidationResult) -> None:
        if isinstance(result, Passed):
            self.value = result.value
            self.error_message = None
            self._set_state(State.SUBMIT)
        elif isinstance(result, Warned):
            self.warning_message = result.message
            self._set_state(State.WARNING)
        else:
            self.error_message = result.message
            self._set_state(State.ERROR)

    def _set_state(self, state: State) -> None:
        if state is not self.state:
            logger.debug("%s: %s -> %s", type(self).__name__, self.state.value, state.value)
            self.state = state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> None:
        """Write the current frame, unless it equals the previous one."""
        frame = self.build_frame()
        if self._needs_redraw:
            self._needs_redraw = False
            self._prev_frame = None
        if frame == self._prev_frame:
            return
        self._draw(frame)

    def finalize(self) -> None:
        """Replace the interactive frame with the final one."""
        self._draw(self.build_final_frame())

    def _draw(self, frame: str) -> None:
        buf = StringIO()
        if self._tty:
            if self._prev_lines:
                buf.write(cursor_up(self._prev_lines))
            buf.write(cursor_column(1))
            buf.write(clear_down())
        buf.write(frame)
        self._write(buf.getvalue())
        self._prev_frame = frame
        self._prev_lines = frame.count("\n")

    def _write(self, data: str) -> None:
        self.output.write(data)
        self.output.flush()

    # ------------------------------------------------------------------
    # Glyph helpers
    # ------------------------------------------------------------------

    @property
    def _flagged(self) -> bool:
        return self.state in (State.ERROR, State.WARNING)

    def symbol_for_state(self) -> str:
        c, s = self.colors, self.symbols
        if self.state is State.SUBMIT:
            return c.green(s.step_submit)
        if self.state is State.CANCEL:
            return c.red(s.step_cancel)
        if self._flagged:
            return c.yellow(s.step_error)
        return c.cyan(s.step_active)

    def _guide(self, glyph: str) -> str:
        return glyph if self.settings.with_guide else ""

    @property
    def bar(self) -> str:
        return self.colors.gray(self._guide(self.symbols.bar))

    @property
    def active_bar(self) -> str:
        if self._flagged:
            return self.colors.yellow(self._guide(self.symbols.bar))
        return self.colors.cyan(self._guide(self.symbols.bar))

    @property
    def bar_end(self) -> str:
        if self._flagged:
            return self.colors.yellow(self._guide(self.symbols.bar_end))
        return self.colors.cyan(self._guide(self.symbols.bar_end))

    def header(self) -> str:
        """Guide line, state glyph with the message, and the help line."""
        return f"{self.bar}\n{self.symbol_for_state()}  {self.message}\n{self.help_line()}"

    def help_line(self) -> str:
        if not self.help:
            return ""
        return f"{self.bar}  {self.colors.dim(self.help)}\n"

    def validation_lines(self) -> str:
        """Closing line: the pending error or warning, or the plain bar end."""
        if self.state is State.ERROR and self.error_message:
            return f"{self.bar_end}  {self.colors.yellow(self.error_message)}\n"
        if self.state is State.WARNING and self.warning_message:
            hint = self.colors.dim("(enter to confirm)")
            return f"{self.bar_end}  {self.colors.yellow(self.warning_message)} {hint}\n"
        return f"{self.bar_end}\n"

    def final_value_line(self, display: str) -> str:
        """Final-frame line for *display*, struck through when cancelled."""
        if self.state is State.CANCEL:
            if not display:
                return f"{self.bar}\n"
            return f"{self.bar}  {self.colors.strikethrough(self.colors.dim(display))}\n"
        return f"{self.bar}  {self.colors.dim(display)}\n"
