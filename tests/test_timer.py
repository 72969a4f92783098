"""
GameTimer tests: pause/resume arithmetic and MM:SS.CC formatting.
"""

import pytest

from tango_core.timer import GameTimer, format_time


@pytest.mark.parametrize("ms,expected", [
    (0, "00:00.00"),
    (61250, "01:01.25"),
    (999, "00:00.99"),
    (1009, "00:01.00"),
    (59999, "00:59.99"),
    (3_600_000, "60:00.00"),
])
def test_format_time(ms, expected):
    assert format_time(ms) == expected


def test_not_started(clock):
    t = GameTimer(clock)
    clock.advance(5000)
    assert t.elapsed() == 0
    assert t.start_time is None


def test_running_elapsed(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(1500)
    assert t.elapsed() == 1500
    assert t.format() == "00:01.50"


def test_pause_freezes_and_resume_continues(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(500)
    t.pause()
    clock.advance(10_000)
    assert t.elapsed() == 500

    t.start()
    assert t.start_time == clock.now - 500
    clock.advance(250)
    assert t.elapsed() == 750


def test_double_start_and_pause_are_noops(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(100)
    t.start()
    assert t.elapsed() == 100
    t.pause()
    clock.advance(100)
    t.pause()
    assert t.elapsed() == 100


def test_reset(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(800)
    t.reset()
    assert (t.start_time, t.elapsed_time, t.is_running) == (None, 0, False)
    assert t.elapsed() == 0


def test_format_override(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(2000)
    assert t.format(61250) == "01:01.25"


def test_dict_round_trip(clock):
    t = GameTimer(clock)
    t.start()
    clock.advance(300)
    t.pause()

    other = GameTimer(clock)
    other.load_dict(t.to_dict())
    assert other.to_dict() == {"startTime": t.start_time, "elapsedTime": 300, "isRunning": False}
    assert other.elapsed() == 300
