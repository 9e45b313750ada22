"""
promptline - Interactive prompts for the terminal.

Text entry, passwords, confirmations, single and multiple selection,
fuzzy autocompletion, spinners, progress bars and task runners, drawn with
raw-mode input and flicker-free differential rendering.

Example:
    import promptline as pl

    pl.intro("create-app")
    name = pl.text("Project name?", placeholder="my-app")
    if pl.is_cancel(name):
        pl.cancel("Aborted")
        raise SystemExit(1)

    kind = pl.select("Kind?", ["library", "application"])

    spin = pl.spinner()
    spin.start("Scaffolding")
    scaffold(name, kind)
    spin.stop("Done")

    pl.outro("Happy hacking!")
"""

from promptline.config import Settings, configure, get_settings, reset_settings
from promptline.core.options import Option
from promptline.core.prompt import CANCEL, Prompt, State, ValidationWarning, is_cancel
from promptline.errors import ConfigError, PromptlineError, PromptValidationError
from promptline.prompts import (
    Autocomplete,
    Confirm,
    Multiselect,
    Password,
    Progress,
    Select,
    Spinner,
    Task,
    TaskResult,
    Tasks,
    Text,
    autocomplete,
    cancel,
    confirm,
    intro,
    multiselect,
    outro,
    password,
    progress,
    select,
    spinner,
    tasks,
    text,
)
from promptline.tui.keybindings import Action

__version__ = "0.1.0"

__all__ = [
    # Result contract
    "CANCEL",
    "is_cancel",
    "ValidationWarning",
    # Prompts
    "text",
    "password",
    "confirm",
    "select",
    "multiselect",
    "autocomplete",
    "Text",
    "Password",
    "Confirm",
    "Select",
    "Multiselect",
    "Autocomplete",
    "Option",
    # Indicators
    "spinner",
    "progress",
    "tasks",
    "Spinner",
    "Progress",
    "Tasks",
    "Task",
    "TaskResult",
    # Session framing
    "intro",
    "outro",
    "cancel",
    # Engine
    "Prompt",
    "State",
    "Action",
    # Settings
    "Settings",
    "configure",
    "get_settings",
    "reset_settings",
    # Errors
    "PromptlineError",
    "ConfigError",
    "PromptValidationError",
]
