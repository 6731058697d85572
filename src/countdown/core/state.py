"""Timer state record and the pure computations over it."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from countdown.core.validation import total_seconds


class TimerPhase(Enum):
    """Possible phases of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


def format_hhmmss(seconds: int) -> str:
    """Format *seconds* as ``HH:MM:SS``.

    The hours field is zero-padded to two digits but is allowed to grow
    wider if *seconds* covers more than 99 hours.
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@dataclass
class TimerState:
    """Configured duration, remaining countdown and run/completion flags.

    ``hours``, ``minutes`` and ``seconds`` hold the last validated
    configuration and are the source of truth for :meth:`reset`.  The
    default instance is an inert all-zero placeholder used before the
    first configuration.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    remaining_seconds: int = 0
    is_running: bool = False
    is_completed: bool = False

    @classmethod
    def new(cls, hours: int, minutes: int, seconds: int) -> TimerState:
        """Build a stopped state for an already-validated duration."""
        return cls(
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            remaining_seconds=total_seconds(hours, minutes, seconds),
        )

    @property
    def total_seconds(self) -> int:
        """Configured duration in seconds."""
        return total_seconds(self.hours, self.minutes, self.seconds)

    def reset(self) -> None:
        """Restore the configured duration and clear both flags."""
        self.remaining_seconds = self.total_seconds
        self.is_running = False
        self.is_completed = False

    def format_remaining_time(self) -> str:
        return format_hhmmss(self.remaining_seconds)

    def copy(self) -> TimerState:
        """Return an independent snapshot of this state."""
        return dataclasses.replace(self)
