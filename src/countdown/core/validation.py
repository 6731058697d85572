"""Duration validation for timer configuration."""

from __future__ import annotations

MAX_HOURS = 23
MAX_MINUTES = 59
MAX_SECONDS = 59


class TimerError(ValueError):
    """Raised when a timer configuration is rejected."""


class OutOfRangeError(TimerError):
    """A duration field lies outside its allowed range."""

    def __init__(self, field: str, value: int, allowed: range) -> None:
        self.field = field
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"{field.capitalize()} must be between {allowed.start} and {allowed.stop - 1}, "
            f"got {value}"
        )


class ZeroDurationError(TimerError):
    """All three duration fields are zero."""

    def __init__(self) -> None:
        super().__init__("Timer duration cannot be zero")


_FIELDS = (
    ("hours", range(0, MAX_HOURS + 1)),
    ("minutes", range(0, MAX_MINUTES + 1)),
    ("seconds", range(0, MAX_SECONDS + 1)),
)


def validate_time(hours: int, minutes: int, seconds: int) -> None:
    """Check a candidate duration, raising on the first failing rule.

    Fields are checked in order hours, minutes, seconds; the zero-duration
    rule is checked last.  Returns ``None`` when the duration is usable.
    """
    values = (hours, minutes, seconds)
    for (field, _), value in zip(_FIELDS, values):
        # bool is an int subclass but never a meaningful duration
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{field} must be an integer, got {type(value).__name__}")
    for (field, allowed), value in zip(_FIELDS, values):
        if value not in allowed:
            raise OutOfRangeError(field, value, allowed)
    if hours == 0 and minutes == 0 and seconds == 0:
        raise ZeroDurationError()


def total_seconds(hours: int, minutes: int, seconds: int) -> int:
    """Return the duration in seconds."""
    return hours * 3600 + minutes * 60 + seconds


def clamp_non_negative(value: int) -> int:
    """Clamp raw user input to zero before it reaches validation."""
    return value if value > 0 else 0
