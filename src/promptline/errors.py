"""Exception types raised by promptline."""

from __future__ import annotations


class PromptlineError(Exception):
    """Base class for all promptline errors."""

    pass


class ConfigError(PromptlineError):
    """Raised when a settings file or environment variable holds an invalid value."""

    pass


class PromptValidationError(PromptlineError):
    """
    Raised when a prompt running in CI mode fails validation.

    In CI mode there is nobody to correct the input, so the failure is
    surfaced to the caller instead of being shown inline.
    """

    def __init__(self, message: str, prompt_message: str = "") -> None:
        super().__init__(message)
        self.prompt_message = prompt_message
