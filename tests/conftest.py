import os
import sys
import pytest

# Add project root to sys.path (so tests can import tango_core.* without installing)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from tango_core.grid_store import GridStore
from tango_core.session import GameSession
from tango_core.types import Cell, CellValue, Constraint, ConstraintKind

# Row strings: O / M filled, o / m pinned (immutable), . empty
_GLYPHS = {
    "O": (CellValue.ORANGE, False),
    "M": (CellValue.MOON, False),
    "o": (CellValue.ORANGE, True),
    "m": (CellValue.MOON, True),
    ".": (CellValue.EMPTY, False),
}


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: int = 1_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def _cells(rows):
    return [[Cell(*_GLYPHS[ch]) for ch in row] for row in rows]


def _constraints(specs):
    """specs: iterable of ((r1, c1), (r2, c2), "equal" | "notequal")."""
    return [Constraint(a, b, ConstraintKind(kind)) for a, b, kind in specs]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_grid():
    """Returns a function that builds a GridStore from row strings."""
    def _make(rows, constraints=()):
        grid = GridStore(len(rows))
        grid.grid = _cells(rows)
        for c in _constraints(constraints):
            grid.add_constraint(c.cell_a[0], c.cell_a[1], c.cell_b[0], c.cell_b[1], c.kind)
        return grid
    return _make


@pytest.fixture
def load_session(clock):
    """Returns a function that loads a GameSession with a hand-made grid."""
    def _load(rows, constraints=(), state="ready"):
        session = GameSession(size=len(rows), seed="FIXTURE", clock=clock)
        session.deserialize({
            "size": len(rows),
            "grid": [[cell.to_dict() for cell in row] for row in _cells(rows)],
            "constraints": [[c.key, c.to_dict()] for c in _constraints(constraints)],
            "gameState": state,
            "difficulty": "medium",
            "seed": "FIXTURE",
            "timer": {"startTime": None, "elapsedTime": 0, "isRunning": False},
            "moveHistory": [],
            "currentMoveIndex": -1,
        })
        return session
    return _load


def first_free_cells(session, count):
    """First `count` empty, non-immutable positions in row-major order."""
    free = []
    for row, col in session.grid.positions():
        cell = session.grid.get_cell(row, col)
        if cell.is_empty and not cell.immutable:
            free.append((row, col))
            if len(free) == count:
                break
    return free
