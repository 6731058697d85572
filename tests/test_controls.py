"""Tests for typed countdown commands."""

import io
from typing import List
from unittest.mock import MagicMock

import pytest

from countdown.cli.controls import Controls
from countdown.core.ticker import Ticker
from countdown.core.timer import Timer


@pytest.fixture()
def timer() -> Timer:
    """A five-second timer that is already running."""
    timer = Timer.with_time(0, 0, 5)
    timer.start()
    return timer


@pytest.fixture()
def ticker(timer: Timer) -> Ticker:
    return Ticker(timer, sleep=lambda _: None)


@pytest.fixture()
def controls(timer: Timer, ticker: Ticker) -> Controls:
    return Controls(timer, ticker)


# ---------------------------------------------------------------------------
# p: pause / resume
# ---------------------------------------------------------------------------


class TestToggle:
    def test_pause_running_timer(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        timer.tick()
        controls.handle("p\n")
        assert not timer.is_running()
        assert capsys.readouterr().out == "Paused at 00:00:04\n"

    def test_resume_paused_timer(self, timer: Timer, controls: Controls) -> None:
        controls.handle("p")
        controls.handle("p")
        assert timer.is_running()
        timer.tick()
        assert timer.get_remaining() == 4

    def test_uppercase_command(self, timer: Timer, controls: Controls) -> None:
        controls.handle("P")
        assert not timer.is_running()

    def test_toggle_after_completion_does_nothing(self, capsys: pytest.CaptureFixture) -> None:
        done = Timer.with_time(0, 0, 1)
        done.start()
        done.tick()
        Controls(done, Ticker(done)).handle("p")
        assert done.is_completed()
        assert not done.is_running()
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# r: reset
# ---------------------------------------------------------------------------


class TestReset:
    def test_reset_restores_duration(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        timer.tick()
        timer.tick()
        controls.handle("r")
        assert timer.get_remaining() == 5
        assert not timer.is_running()
        assert capsys.readouterr().out == "Reset to 00:00:05\n"


# ---------------------------------------------------------------------------
# s: set duration
# ---------------------------------------------------------------------------


class TestSet:
    def test_set_valid_duration(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        controls.handle("s 0 1 0")
        assert timer.get_remaining() == 60
        assert not timer.is_running()
        assert capsys.readouterr().out == "Set to 00:01:00\n"

    def test_set_clamps_negative(self, timer: Timer, controls: Controls) -> None:
        controls.handle("s 0 -3 30")
        assert timer.get_remaining_time_string() == "00:00:30"

    def test_invalid_duration_keeps_last_good_state(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        timer.tick()
        before = timer.get_state()
        controls.handle("s 25 0 0")
        captured = capsys.readouterr()
        assert captured.err == "Hours must be between 0 and 23, got 25\n"
        assert captured.out == ""
        assert timer.get_state() == before
        assert timer.is_running()

    def test_zero_duration_is_rejected(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        controls.handle("s 0 0 0")
        assert "Timer duration cannot be zero" in capsys.readouterr().err
        assert timer.get_remaining() == 5

    @pytest.mark.parametrize("line", ["s", "s 1 2", "s 1 2 3 4", "s a b c"])
    def test_malformed_set_prints_usage(
        self, line: str, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        controls.handle(line)
        assert "Usage: s HOURS MINUTES SECONDS" in capsys.readouterr().err
        assert timer.get_remaining() == 5


# ---------------------------------------------------------------------------
# q, unknown and blank input
# ---------------------------------------------------------------------------


class TestOtherCommands:
    def test_quit_stops_ticker(self, ticker: Ticker, controls: Controls) -> None:
        controls.handle("q")
        assert ticker.stopped
        assert ticker.run() is False

    def test_unknown_command(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        controls.handle("x")
        err = capsys.readouterr().err
        assert "Unknown command: x" in err
        assert "Commands:" in err
        assert timer.is_running()

    def test_blank_line_is_ignored(
        self, timer: Timer, controls: Controls, capsys: pytest.CaptureFixture
    ) -> None:
        controls.handle("   \n")
        assert capsys.readouterr() == ("", "")
        assert timer.is_running()

    def test_commands_take_the_ticker_lock(self, timer: Timer) -> None:
        lock = MagicMock()
        controls = Controls(timer, Ticker(timer, lock=lock))
        controls.handle("p")
        controls.handle("r")
        controls.handle("s 0 0 9")
        assert lock.__enter__.call_count == 3


# ---------------------------------------------------------------------------
# listen()
# ---------------------------------------------------------------------------


class TestListen:
    def test_handles_each_line(self, timer: Timer, ticker: Ticker, controls: Controls) -> None:
        controls.listen(io.StringIO("p\np\ns 0 0 9\np\n"))
        assert timer.is_running()
        assert timer.get_remaining() == 9
        assert not ticker.stopped

    def test_end_of_input_with_stopped_timer_stops_ticker(
        self, timer: Timer, ticker: Ticker, controls: Controls
    ) -> None:
        controls.listen(io.StringIO("p\n"))
        assert not timer.is_running()
        assert ticker.stopped

    def test_end_of_input_while_running_keeps_ticker(
        self, ticker: Ticker, controls: Controls
    ) -> None:
        controls.listen(io.StringIO(""))
        assert not ticker.stopped

    def test_quit_ends_listening(self, timer: Timer, controls: Controls) -> None:
        controls.listen(io.StringIO("q\np\n"))
        assert timer.is_running()

    def test_closed_stream(self, ticker: Ticker, controls: Controls) -> None:
        stream = io.StringIO("p\n")
        stream.close()
        controls.listen(stream)
        assert not ticker.stopped

    def test_listen_in_background(self, timer: Timer, ticker: Ticker, controls: Controls) -> None:
        thread = controls.listen_in_background(io.StringIO("s 0 2 0\n"))
        thread.join(timeout=5)
        assert not thread.is_alive()
        assert thread.daemon
        assert timer.get_remaining() == 120
        assert ticker.stopped

    def test_listened_output(self, controls: Controls, capsys: pytest.CaptureFixture) -> None:
        controls.listen(io.StringIO("p\nr\n"))
        lines: List[str] = capsys.readouterr().out.splitlines()
        assert lines == ["Paused at 00:00:05", "Reset to 00:00:05"]
