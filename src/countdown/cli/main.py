"""CLI entry point for countdown.

Uses Click to expose the ``countdown`` command group.  This is the host
boundary: it clamps raw input, owns the single :class:`Timer`, and drives
it through a :class:`Ticker`.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, TypeVar

import click

import countdown
from countdown.cli.controls import Controls
from countdown.core.state import TimerState, format_hhmmss
from countdown.core.ticker import DEFAULT_INTERVAL, Ticker
from countdown.core.timer import Timer
from countdown.core.validation import (
    TimerError,
    clamp_non_negative,
    total_seconds,
    validate_time,
)

T = TypeVar("T")

# Lets "-5" through as a positional value so it can be clamped.
_DURATION_SETTINGS = {"ignore_unknown_options": True}


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting ``TimerError`` to a CLI error.

    On ``TimerError`` the message is printed to stderr and the process
    exits with code 1.
    """
    try:
        return action()
    except TimerError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _sanitize(hours: int, minutes: int, seconds: int) -> tuple[int, int, int]:
    return clamp_non_negative(hours), clamp_non_negative(minutes), clamp_non_negative(seconds)


def _echo_state(state: TimerState) -> None:
    """Print the countdown while it is running."""
    if state.is_running:
        click.echo(state.format_remaining_time())


def _duration_arguments(func: Callable) -> Callable:
    for name in ("seconds", "minutes", "hours"):
        func = click.argument(name, type=int)(func)
    return func


@click.group()
@click.version_option(version=countdown.__version__, prog_name="countdown")
@click.option("-v", "--verbose", is_flag=True, help="Log timer transitions.")
def cli(verbose: bool) -> None:
    """countdown: an hours/minutes/seconds countdown timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(context_settings=_DURATION_SETTINGS)
@_duration_arguments
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_INTERVAL,
    show_default=True,
    envvar="COUNTDOWN_INTERVAL",
    help="Seconds between ticks.",
)
def run(hours: int, minutes: int, seconds: int, interval: float) -> None:
    """Count down from HOURS MINUTES SECONDS.

    While counting, commands can be typed one per line: ``p`` pauses or
    resumes, ``r`` resets, ``s H M S`` sets a new duration and ``q``
    quits.
    """
    timer = Timer()
    _run(lambda: timer.configure(*_sanitize(hours, minutes, seconds)))
    timer.set_state_callback(_echo_state)
    ticker = Ticker(timer, interval=interval)

    ticker.call(timer.start)
    Controls(timer, ticker).listen_in_background(click.get_text_stream("stdin"))
    try:
        completed = ticker.run(keep_alive=True)
    except KeyboardInterrupt:
        ticker.call(timer.pause)
        click.echo(f"Paused at {timer.get_remaining_time_string()}")
        sys.exit(130)
    if completed:
        click.echo("Timer completed")
    else:
        click.echo(f"Stopped at {ticker.call(timer.get_remaining_time_string)}")


@cli.command(context_settings=_DURATION_SETTINGS)
@_duration_arguments
def check(hours: int, minutes: int, seconds: int) -> None:
    """Validate HOURS MINUTES SECONDS and print the duration."""
    values = _sanitize(hours, minutes, seconds)
    _run(lambda: validate_time(*values))
    click.echo(format_hhmmss(total_seconds(*values)))
