"""Ticker: drives a :class:`Timer` at a fixed cadence."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional, TypeVar

from countdown.core.timer import Timer

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_INTERVAL = 1.0


class Ticker:
    """Call ``timer.tick()`` once per *interval* while the timer runs.

    Each tick is taken under *lock*.  Other event sources that touch the
    same timer (typed commands, signal handlers) go through :meth:`call`
    so that they are serialized with the ticks.  Late wake-ups are not
    caught up: each interval advances the timer by exactly one second.

    Without an explicit *sleep* the ticker waits on its stop event, so
    :meth:`stop` from another thread takes effect immediately.
    """

    def __init__(
        self,
        timer: Timer,
        interval: float = DEFAULT_INTERVAL,
        sleep: Optional[Callable[[float], Any]] = None,
        lock: Optional[threading.Lock] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._timer = timer
        self._interval = interval
        self._stopped = threading.Event()
        self._sleep = sleep if sleep is not None else self._stopped.wait
        self._lock = lock if lock is not None else threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def stop(self) -> None:
        """Make :meth:`run` return before its next tick."""
        self._stopped.set()

    def call(self, action: Callable[..., T], *args: Any) -> T:
        """Run *action* with the timer lock held."""
        with self._lock:
            return action(*args)

    def run(self, max_ticks: Optional[int] = None, keep_alive: bool = False) -> bool:
        """Tick until the timer completes or the ticker is stopped.

        Unless *keep_alive* is set, the run also ends as soon as the timer
        is not running.  With *keep_alive* a paused or reset timer keeps
        being polled so another event source can start it again.

        Returns ``True`` if the run ended because the timer completed and
        ``False`` if it was stopped, paused, reset, or *max_ticks* ran out.
        """
        ticks = 0
        while not self._stopped.is_set():
            if not keep_alive and not self.call(self._timer.is_running):
                break
            if max_ticks is not None and ticks >= max_ticks:
                return False
            self._sleep(self._interval)
            if self._stopped.is_set():
                break
            ticks += 1
            if self.call(self._timer.tick):
                logger.debug("Timer completed after %d ticks", ticks)
                return True
        logger.debug("Ticker stopped after %d ticks", ticks)
        return False
