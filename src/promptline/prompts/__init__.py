"""
Ready-made prompts.

Each widget class has a same-named function that builds the prompt and
runs it in one call:

    from promptline.prompts import text, select

    name = text("Project name?", placeholder="my-app")
    kind = select("Kind?", ["library", "application"])
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from promptline.prompts.autocomplete import Autocomplete
from promptline.prompts.confirm import Confirm
from promptline.prompts.messages import cancel, intro, outro
from promptline.prompts.multiselect import Multiselect
from promptline.prompts.password import Password
from promptline.prompts.progress import Progress
from promptline.prompts.select import Select
from promptline.prompts.spinner import Spinner
from promptline.prompts.tasks import Task, TaskResult, Tasks
from promptline.prompts.text import Text


def text(message: str, **kwargs: Any) -> Any:
    return Text(message, **kwargs).run()


def password(message: str, **kwargs: Any) -> Any:
    return Password(message, **kwargs).run()


def confirm(message: str, **kwargs: Any) -> Any:
    return Confirm(message, **kwargs).run()


def select(message: str, options: Iterable[Any], **kwargs: Any) -> Any:
    return Select(message, options, **kwargs).run()


def multiselect(message: str, options: Iterable[Any], **kwargs: Any) -> Any:
    return Multiselect(message, options, **kwargs).run()


def autocomplete(message: str, options: Iterable[Any], **kwargs: Any) -> Any:
    return Autocomplete(message, options, **kwargs).run()


def spinner(**kwargs: Any) -> Spinner:
    """Create a spinner; call ``start()`` on it to begin animating."""
    return Spinner(**kwargs)


def progress(total: int, **kwargs: Any) -> Progress:
    """Create a progress bar; call ``start()`` on it to begin."""
    return Progress(total, **kwargs)


def tasks(items: Iterable[Task | Mapping[str, Any]], **kwargs: Any) -> list[TaskResult]:
    """Run *items* sequentially and return one result per enabled task."""
    return Tasks(items, **kwargs).run()


__all__ = [
    # Widgets
    "Text",
    "Password",
    "Confirm",
    "Select",
    "Multiselect",
    "Autocomplete",
    "Spinner",
    "Progress",
    "Tasks",
    "Task",
    "TaskResult",
    # One-call helpers
    "text",
    "password",
    "confirm",
    "select",
    "multiselect",
    "autocomplete",
    "spinner",
    "progress",
    "tasks",
    "intro",
    "outro",
    "cancel",
]
