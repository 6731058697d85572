"""Timer core: a tick-driven countdown state machine."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from countdown.core.state import TimerPhase, TimerState
from countdown.core.validation import validate_time

logger = logging.getLogger(__name__)

StateCallback = Callable[[TimerState], None]


class Timer:
    """A countdown timer advanced one second at a time by :meth:`tick`.

    The timer owns a single :class:`TimerState` and is the only writer to
    it.  It contains no clock, no threads and no I/O: an external ticker
    calls :meth:`tick` once per second and every call must come from one
    logical thread of control.  Readers only ever receive copies.
    """

    def __init__(self) -> None:
        self._state: TimerState = TimerState()
        self._started: bool = False
        self._callback: Optional[StateCallback] = None

    @classmethod
    def with_time(cls, hours: int, minutes: int, seconds: int) -> Timer:
        """Create a timer already configured for the given duration.

        Raises :class:`~countdown.core.validation.TimerError` if the
        duration is invalid.
        """
        validate_time(hours, minutes, seconds)
        timer = cls()
        timer._state = TimerState.new(hours, minutes, seconds)
        return timer

    # -- public interface ----------------------------------------------------

    def set_state_callback(self, callback: Optional[StateCallback]) -> None:
        """Register *callback* to receive a snapshot after each state change.

        Only one callback is held; registering another replaces it and
        ``None`` removes it.  The callback must not call back into the timer.
        """
        self._callback = callback

    def configure(self, hours: int, minutes: int, seconds: int) -> None:
        """Replace the duration and stop the countdown.

        On a validation error the exception propagates and the current state
        is left exactly as it was.
        """
        try:
            validate_time(hours, minutes, seconds)
        except ValueError as exc:
            logger.info("Rejected configuration %r: %s", (hours, minutes, seconds), exc)
            raise
        self._state = TimerState.new(hours, minutes, seconds)
        self._started = False
        logger.debug("Configured %s", self._state.format_remaining_time())
        self._notify()

    def start(self) -> None:
        """Start or resume the countdown.

        Ignored when the timer is completed or has nothing left to count.
        Calling it while already running notifies again without changing
        any value.
        """
        if self._state.is_completed or self._state.remaining_seconds == 0:
            return
        self._state.is_running = True
        self._state.is_completed = False
        self._started = True
        logger.debug("Started at %s", self._state.format_remaining_time())
        self._notify()

    def pause(self) -> None:
        """Freeze the countdown.  Ignored unless running."""
        if not self._state.is_running:
            return
        self._state.is_running = False
        logger.debug("Paused at %s", self._state.format_remaining_time())
        self._notify()

    def reset(self) -> None:
        """Restore the configured duration from any phase."""
        self._state.reset()
        self._started = False
        logger.debug("Reset to %s", self._state.format_remaining_time())
        self._notify()

    def tick(self) -> bool:
        """Advance the countdown by one second.

        Returns ``True`` only for the call that brings the timer to
        completion.  Does nothing unless running, and never goes below zero.
        """
        if not self._state.is_running or self._state.is_completed:
            return False
        if self._state.remaining_seconds == 0:
            return False

        self._state.remaining_seconds -= 1
        self._notify()

        if self._state.remaining_seconds == 0:
            self._state.is_running = False
            self._state.is_completed = True
            logger.debug("Completed")
            self._notify()
            return True
        return False

    def get_state(self) -> TimerState:
        """Return a snapshot of the current state."""
        return self._state.copy()

    def get_remaining(self) -> int:
        """Return the remaining time in seconds."""
        return self._state.remaining_seconds

    def get_remaining_time_string(self) -> str:
        """Return the remaining time as ``HH:MM:SS``."""
        return self._state.format_remaining_time()

    def is_running(self) -> bool:
        return self._state.is_running

    def is_completed(self) -> bool:
        return self._state.is_completed

    def get_phase(self) -> TimerPhase:
        """Return the current phase derived from the state flags."""
        if self._state.is_completed:
            return TimerPhase.COMPLETED
        if self._state.is_running:
            return TimerPhase.RUNNING
        if self._started:
            return TimerPhase.PAUSED
        return TimerPhase.IDLE

    # -- private helpers -----------------------------------------------------

    def _notify(self) -> None:
        """Hand a snapshot to the registered callback, if any."""
        if self._callback is not None:
            self._callback(self._state.copy())
