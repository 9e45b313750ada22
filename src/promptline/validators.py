"""
Reusable validators.

Each factory returns a callable suitable for a prompt's ``validate``
argument: it returns ``None`` when the value is acceptable, an error string
otherwise, or a :class:`~promptline.core.prompt.ValidationWarning` for
:func:`warn_if`.

    from promptline import validators as v

    text("Port?", validate=v.combine(v.required(), v.integer(), v.in_range(1, 65535)))
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import grapheme

from promptline.core.prompt import Failed, Passed, ValidationWarning, Warned, normalize_validation

Validator = Callable[[Any], Any]

_INTEGER = re.compile(r"-?\d+")
_EMAIL = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_URL = re.compile(r"https?://\S+")


def required(message: str = "This field is required") -> Validator:
    def check(value: Any) -> str | None:
        if value is None:
            return message
        if isinstance(value, (list, tuple, set)):
            return message if not value else None
        return message if not str(value).strip() else None

    return check


def min_length(length: int, message: str | None = None) -> Validator:
    msg = message or f"Must be at least {length} characters"
    return lambda value: msg if grapheme.length(str(value or "")) < length else None


def max_length(length: int, message: str | None = None) -> Validator:
    msg = message or f"Must be at most {length} characters"
    return lambda value: msg if grapheme.length(str(value or "")) > length else None


def pattern(regex: str | re.Pattern[str], message: str = "Invalid format") -> Validator:
    """Require the whole value to match *regex*."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex
    return lambda value: None if compiled.fullmatch(str(value or "")) else message


def one_of(allowed: Iterable[Any], message: str | None = None) -> Validator:
    choices = list(allowed)
    msg = message or f"Must be one of: {', '.join(str(c) for c in choices)}"
    return lambda value: None if value in choices else msg


def integer(message: str = "Must be a number") -> Validator:
    return pattern(_INTEGER, message)


def in_range(low: int, high: int, message: str | None = None) -> Validator:
    """Inclusive integer range."""
    msg = message or f"Must be between {low} and {high}"

    def check(value: Any) -> str | None:
        text = str(value or "").strip()
        if not _INTEGER.fullmatch(text):
            return msg
        return None if low <= int(text) <= high else msg

    return check


def email(message: str = "Must be a valid email address") -> Validator:
    return pattern(_EMAIL, message)


def url(message: str = "Must be a valid URL") -> Validator:
    return pattern(_URL, message)


def path_exists(message: str = "Path does not exist") -> Validator:
    return lambda value: None if value and Path(str(value)).expanduser().exists() else message


def directory_exists(message: str = "Directory does not exist") -> Validator:
    return lambda value: None if value and Path(str(value)).expanduser().is_dir() else message


def warn_if(predicate: Callable[[Any], bool], message: str) -> Validator:
    """Ask for confirmation instead of rejecting when *predicate* holds."""
    return lambda value: ValidationWarning(message) if predicate(value) else None


def combine(*validators: Validator) -> Validator:
    """
    Run *validators* in order.

    The first error wins.  A warning is remembered but later validators
    still run, so an error after a warning is still reported.
    """

    def check(value: Any) -> Any:
        warning: Warned | None = None
        for validator in validators:
            result = normalize_validation(validator(value), value)
            if isinstance(result, Failed):
                return result
            if isinstance(result, Warned) and warning is None:
                warning = result
        return warning if warning is not None else Passed(value)

    return check
