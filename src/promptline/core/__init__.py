"""
Prompt engine and the building blocks widgets compose.
"""
from __future__ import annotations

from promptline.core.fuzzy import filter_options, matches, score
from promptline.core.indicator import FinishState, Indicator, IndicatorState
from promptline.core.options import Option, normalize_option, normalize_options
from promptline.core.prompt import (
    CANCEL,
    Failed,
    KeyEvent,
    Passed,
    Prompt,
    State,
    ValidationWarning,
    Warned,
    is_cancel,
)
from promptline.core.text_input import EditableText
from promptline.core.viewport import Viewport

__all__ = [
    # Engine
    "Prompt",
    "State",
    "KeyEvent",
    "CANCEL",
    "is_cancel",
    # Validation
    "Passed",
    "Failed",
    "Warned",
    "ValidationWarning",
    # Building blocks
    "EditableText",
    "Viewport",
    "Option",
    "normalize_option",
    "normalize_options",
    "matches",
    "score",
    "filter_options",
    # Indicators
    "Indicator",
    "IndicatorState",
    "FinishState",
]
