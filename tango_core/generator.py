"""
Seeded puzzle generation.

Draws are consumed from a single SeededRandom in a fixed order (shuffle,
prefilled symbols, then constraints), so (size, difficulty, seed) fully
determines the puzzle.
"""
import logging
import math
import random
import string
from typing import Dict, List, Optional

from tango_utils.coords import Position
from tango_core.grid_store import GridStore
from tango_core.seeded_random import SeededRandom
from tango_core.types import CellValue, ConstraintKind, InitialPuzzleState

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "medium"

PREFILL_RATIOS: Dict[str, float] = {
    "easy": 0.40,
    "medium": 0.25,
    "hard": 0.15,
}

CONSTRAINT_RATIO = 0.7

SEED_LENGTH = 8
SEED_ALPHABET = string.digits + string.ascii_uppercase


def is_known_difficulty(difficulty: str) -> bool:
    return difficulty in PREFILL_RATIOS


def prefilled_count(size: int, difficulty: str) -> int:
    """Number of pinned cells; unknown difficulties use the medium ratio."""
    ratio = PREFILL_RATIOS.get(difficulty)
    if ratio is None:
        logger.warning(f"Unknown difficulty '{difficulty}', using {DEFAULT_DIFFICULTY}")
        ratio = PREFILL_RATIOS[DEFAULT_DIFFICULTY]
    return math.floor(size * size * ratio)


def constraint_count(size: int) -> int:
    """Number of constraint draws (some vertical draws are skipped)."""
    return math.floor(size * CONSTRAINT_RATIO)


def generate_seed(rng: Optional[random.Random] = None) -> str:
    """Random seed of 8 upper-case base-36 characters."""
    rng = rng or random.Random()
    return "".join(rng.choice(SEED_ALPHABET) for _ in range(SEED_LENGTH))


def normalize_seed(seed: Optional[str]) -> Optional[str]:
    """Strip and upper-case a custom seed; blank seeds become None."""
    if seed is None:
        return None
    seed = seed.strip()
    return seed.upper() if seed else None


def generate_puzzle(grid: GridStore, rng: SeededRandom, difficulty: str) -> InitialPuzzleState:
    """
    Fill an empty grid with pinned cells and constraints.

    Args:
        grid: Fresh GridStore to populate
        rng: Stream to draw from (advanced in place)
        difficulty: "easy", "medium" or "hard"

    Returns:
        Snapshot of the generated puzzle
    """
    size = grid.size

    positions: List[Position] = list(grid.positions())
    rng.shuffle(positions)

    to_fill = min(prefilled_count(size, difficulty), len(positions))
    for row, col in positions[:to_fill]:
        value = CellValue.ORANGE if rng.chance() else CellValue.MOON
        grid.set_immutable(row, col, value)

    skipped = 0
    for _ in range(constraint_count(size)):
        row = rng.below(size)
        col = rng.below(size - 1)
        kind = ConstraintKind.EQUAL if rng.chance() else ConstraintKind.NOT_EQUAL

        if rng.chance():
            grid.add_constraint(row, col, row, col + 1, kind)
        elif row < size - 1:
            grid.add_constraint(row, col, row + 1, col, kind)
        else:
            # vertical draw on the last row
            skipped += 1

    logger.debug(
        f"Generated {size}x{size} {difficulty} puzzle from seed '{rng.seed}': "
        f"{to_fill} pinned cells, {len(grid.constraints)} constraints ({skipped} skipped)"
    )
    return grid.snapshot()
