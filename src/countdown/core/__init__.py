"""Pure timer logic: validation, state, controller and ticker."""

from countdown.core.state import TimerPhase, TimerState, format_hhmmss
from countdown.core.timer import Timer
from countdown.core.validation import (
    OutOfRangeError,
    TimerError,
    ZeroDurationError,
    validate_time,
)

__all__ = [
    "OutOfRangeError",
    "Timer",
    "TimerError",
    "TimerPhase",
    "TimerState",
    "ZeroDurationError",
    "format_hhmmss",
    "validate_time",
]
