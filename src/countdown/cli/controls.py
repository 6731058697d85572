"""Typed line commands for a countdown in progress."""

from __future__ import annotations

import logging
import threading
from typing import IO, List, Optional

import click

from countdown.core.ticker import Ticker
from countdown.core.timer import Timer
from countdown.core.validation import TimerError, clamp_non_negative

logger = logging.getLogger(__name__)

USAGE = "Commands: p (pause/resume), r (reset), s HOURS MINUTES SECONDS (set), q (quit)"


class Controls:
    """Route typed commands to a timer through its ticker's lock.

    One command per line:

    ``p``        pause a running timer, or start it otherwise
    ``r``        reset to the configured duration
    ``s H M S``  set a new duration; this stops the countdown
    ``q``        stop the ticker

    A rejected ``s`` prints the error and leaves the timer as it was.
    """

    def __init__(self, timer: Timer, ticker: Ticker) -> None:
        self._timer = timer
        self._ticker = ticker

    # -- public interface ----------------------------------------------------

    def handle(self, line: str) -> None:
        """Execute a single command line."""
        words = line.split()
        if not words:
            return
        command, args = words[0].lower(), words[1:]
        logger.debug("Command %r", line.strip())

        if command == "p":
            message = self._ticker.call(self._toggle)
        elif command == "r":
            message = self._ticker.call(self._reset)
        elif command == "s":
            message = self._set(args)
        elif command == "q":
            self._ticker.stop()
            return
        else:
            click.echo(f"Unknown command: {words[0]}", err=True)
            click.echo(USAGE, err=True)
            return

        if message:
            click.echo(message)

    def listen(self, stream: IO[str]) -> None:
        """Handle lines from *stream* until it runs out or the ticker stops."""
        while not self._ticker.stopped:
            try:
                line = stream.readline()
            except ValueError:
                # closed underneath us when the host exits first
                logger.debug("Command stream closed")
                return
            if not line:
                break
            self.handle(line)

        # once input is exhausted nothing can resume a stopped timer
        if not self._ticker.call(self._timer.is_running):
            self._ticker.stop()

    def listen_in_background(self, stream: IO[str]) -> threading.Thread:
        thread = threading.Thread(
            target=self.listen, args=(stream,), name="countdown-controls", daemon=True
        )
        thread.start()
        return thread

    # -- private helpers -----------------------------------------------------

    def _toggle(self) -> Optional[str]:
        if self._timer.is_running():
            self._timer.pause()
            return f"Paused at {self._timer.get_remaining_time_string()}"
        self._timer.start()
        return None

    def _reset(self) -> str:
        self._timer.reset()
        return f"Reset to {self._timer.get_remaining_time_string()}"

    def _configure(self, hours: int, minutes: int, seconds: int) -> str:
        self._timer.configure(hours, minutes, seconds)
        return f"Set to {self._timer.get_remaining_time_string()}"

    def _set(self, args: List[str]) -> Optional[str]:
        try:
            hours, minutes, seconds = (clamp_non_negative(int(arg)) for arg in args)
        except ValueError:
            click.echo("Usage: s HOURS MINUTES SECONDS", err=True)
            return None
        try:
            return self._ticker.call(self._configure, hours, minutes, seconds)
        except TimerError as exc:
            click.echo(str(exc), err=True)
            return None
