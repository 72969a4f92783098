"""
Game timer with pause/resume and MM:SS.CC formatting.

All values are integer milliseconds read from an injectable clock, so tests
can drive time by hand.
"""
import time
from typing import Any, Callable, Dict, Optional

Clock = Callable[[], int]


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


def format_time(milliseconds: int) -> str:
    """Render a duration as MM:SS.CC (minutes, seconds, centiseconds)."""
    milliseconds = int(milliseconds)
    total_seconds = milliseconds // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    centiseconds = (milliseconds % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}.{centiseconds:02d}"


class GameTimer:
    """Stopwatch that keeps its elapsed time across pauses."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or wall_clock_ms
        self.start_time: Optional[int] = None
        self.elapsed_time: int = 0
        self.is_running: bool = False

    def start(self) -> None:
        """Start or resume; the start instant is shifted back by the elapsed time."""
        if not self.is_running:
            self.start_time = self.clock() - self.elapsed_time
            self.is_running = True

    def pause(self) -> None:
        if self.is_running:
            self.elapsed_time = self.clock() - self.start_time
            self.is_running = False

    def reset(self) -> None:
        self.start_time = None
        self.elapsed_time = 0
        self.is_running = False

    def elapsed(self) -> int:
        if self.is_running:
            return self.clock() - self.start_time
        return self.elapsed_time

    def format(self, milliseconds: Optional[int] = None) -> str:
        """format_time() of an explicit value, or of the live elapsed time."""
        return format_time(self.elapsed() if milliseconds is None else milliseconds)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "startTime": self.start_time,
            "elapsedTime": self.elapsed_time,
            "isRunning": self.is_running,
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        start = data.get("startTime")
        self.start_time = int(start) if start is not None else None
        self.elapsed_time = int(data.get("elapsedTime", 0))
        self.is_running = bool(data.get("isRunning", False))
