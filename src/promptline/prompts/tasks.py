"""Sequential task runner."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TextIO

from promptline.config import Settings, get_settings
from promptline.logging import get_logger
from promptline.prompts.spinner import Spinner
from promptline.tui.colors import Colors

logger = get_logger("tasks")


@dataclass(frozen=True)
class Task:
    """
    One unit of work.

    ``run`` takes no arguments, or one: a callback that replaces the spinner
    message while the task is running.
    """

    title: str
    run: Callable[..., Any]
    enabled: bool = True


@dataclass(frozen=True)
class TaskResult:
    title: str
    status: str  # "success" or "error"
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def _coerce_task(raw: Task | Mapping[str, Any]) -> Task:
    if isinstance(raw, Task):
        return raw
    if "title" not in raw or "task" not in raw:
        raise ValueError(f"task mapping needs 'title' and 'task' keys: {raw!r}")
    return Task(title=str(raw["title"]), run=raw["task"], enabled=bool(raw.get("enabled", True)))


def _wants_message(fn: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in params
    )


class Tasks:
    """
    Run tasks one after another, each under its own spinner.

    A task that raises is reported as failed and the runner moves on.
    An interrupt cancels the running spinner and propagates.
    Disabled tasks are skipped without a result.
    """

    def __init__(
        self,
        tasks: Iterable[Task | Mapping[str, Any]],
        *,
        output: TextIO | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.tasks = [_coerce_task(t) for t in tasks]
        self.output = output
        self.settings = settings if settings is not None else get_settings()

    def run(self) -> list[TaskResult]:
        results: list[TaskResult] = []
        for task in self.tasks:
            if not task.enabled:
                logger.debug("Skipping disabled task %r", task.title)
                continue
            results.append(self._run_task(task))
        return results

    def _run_task(self, task: Task) -> TaskResult:
        spinner = Spinner(output=self.output, settings=self.settings)
        spinner.start(task.title)
        try:
            if _wants_message(task.run):
                task.run(spinner.message)
            else:
                task.run()
        except Exception as exc:
            logger.warning("Task %r failed: %s", task.title, exc, exc_info=True)
            spinner.error(task.title)
            colors = Colors(self.settings.use_color(spinner.output))
            spinner.output.write(f"{colors.gray(spinner.symbols.bar)}  {colors.red(str(exc))}\n")
            spinner.output.flush()
            return TaskResult(task.title, "error", str(exc))
        else:
            spinner.stop(task.title)
            return TaskResult(task.title, "success")
        finally:
            # KeyboardInterrupt and SystemExit pass through; the spinner
            # thread must not outlive the task. No-op once finished.
            spinner.cancel(task.title)
