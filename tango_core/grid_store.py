"""
GridStore - authoritative cell and constraint state for a Tango puzzle.

The store owns the N×N matrix of cells and the insertion-ordered mapping of
pairwise constraints. Cells are frozen values; every write replaces the cell,
so a Cell handed out by get_cell() can never be used to bypass immutability.

Mutation paths:
- set_cell(): player-facing, refuses immutable cells
- set_immutable(): generation/restore only, pins a value for the puzzle's life
"""
from typing import Any, Dict, Iterator, List, Optional

from tango_utils.coords import Position
from tango_core.types import (
    Cell,
    CellValue,
    Constraint,
    ConstraintKind,
    InitialPuzzleState,
)


class GridStore:
    """
    Cell and constraint store for a square Tango grid.

    Attributes:
        size: Number of rows and columns (fixed for the instance's lifetime)
        grid: Row-major list of rows of Cell values
        constraints: Mapping of constraint key to Constraint (insertion-ordered)
    """

    def __init__(self, size: int = 6):
        """
        Initialize an empty grid.

        Args:
            size: Number of rows and columns (must be > 0)
        """
        if size <= 0:
            raise ValueError(f"Grid size must be positive: {size}")

        self.size: int = size
        self.grid: List[List[Cell]] = self._initialize_empty_grid()
        self.constraints: Dict[str, Constraint] = {}

    def _initialize_empty_grid(self) -> List[List[Cell]]:
        return [[Cell() for _ in range(self.size)] for _ in range(self.size)]

    # =============================================================================
    # CELL QUERIES
    # =============================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """
        Get the cell at a position.

        Returns:
            The Cell, or None for out-of-bounds positions
        """
        if not self.is_valid_position(row, col):
            return None
        return self.grid[row][col]

    def get_value(self, row: int, col: int) -> Optional[CellValue]:
        """Shortcut for get_cell(...).value; None when out of bounds."""
        cell = self.get_cell(row, col)
        return cell.value if cell is not None else None

    def positions(self) -> Iterator[Position]:
        """Iterates over all positions in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def rows(self) -> List[List[CellValue]]:
        """Cell values line by line, left to right."""
        return [[cell.value for cell in row] for row in self.grid]

    def columns(self) -> List[List[CellValue]]:
        """Cell values column by column, top to bottom."""
        return [[self.grid[row][col].value for row in range(self.size)] for col in range(self.size)]

    def is_full(self) -> bool:
        """True when no cell is empty."""
        return all(not cell.is_empty for row in self.grid for cell in row)

    # =============================================================================
    # CELL MUTATIONS
    # =============================================================================

    def set_cell(self, row: int, col: int, value: CellValue) -> bool:
        """
        Set a cell value if the position exists and the cell is not immutable.

        Returns:
            True if the cell was written, False otherwise (no side effects)
        """
        if not self.is_valid_position(row, col):
            return False
        cell = self.grid[row][col]
        if cell.immutable:
            return False
        self.grid[row][col] = Cell(value, False)
        return True

    def set_immutable(self, row: int, col: int, value: CellValue) -> bool:
        """
        Overwrite a cell and pin it (generation and restore only).

        Returns:
            True if successful, False for out-of-bounds positions
        """
        if not self.is_valid_position(row, col):
            return False
        self.grid[row][col] = Cell(value, True)
        return True

    def clear(self) -> None:
        """Empty every non-immutable cell. Immutable cells and constraints stay."""
        for row in range(self.size):
            for col in range(self.size):
                if not self.grid[row][col].immutable:
                    self.grid[row][col] = Cell()

    # =============================================================================
    # CONSTRAINT MANAGEMENT
    # =============================================================================

    def add_constraint(self, row1: int, col1: int, row2: int, col2: int, kind: ConstraintKind) -> bool:
        """
        Add or overwrite the constraint between two cells.

        Returns:
            True if stored, False if either position is out of bounds
        """
        if not (self.is_valid_position(row1, col1) and self.is_valid_position(row2, col2)):
            return False
        constraint = Constraint((row1, col1), (row2, col2), kind)
        self.constraints[constraint.key] = constraint
        return True

    def get_constraints(self) -> List[Constraint]:
        """All constraints in insertion order."""
        return list(self.constraints.values())

    def constraints_for(self, row: int, col: int) -> List[Constraint]:
        """Constraints touching (row, col), in insertion order."""
        return [c for c in self.constraints.values() if c.involves(row, col)]

    # =============================================================================
    # SNAPSHOTS
    # =============================================================================

    def snapshot(self) -> InitialPuzzleState:
        """Immutable copy of the current cells and constraints."""
        return InitialPuzzleState(
            cells=tuple(tuple(row) for row in self.grid),
            constraints=tuple(self.constraints.values()),
        )

    def restore(self, state: InitialPuzzleState) -> None:
        """Replace cells and constraints with those of a snapshot."""
        if state.size != self.size:
            raise ValueError(f"Snapshot size {state.size} does not match grid size {self.size}")
        self.grid = [list(row) for row in state.cells]
        self.constraints = {c.key: c for c in state.constraints}

    def get_statistics(self) -> Dict[str, int]:
        """
        Get grid statistics.

        Returns:
            Dict with cell counts by kind and the number of constraints
        """
        stats = {
            "empty_cells": 0,
            "filled_cells": 0,
            "immutable_cells": 0,
            "orange_cells": 0,
            "moon_cells": 0,
            "total_cells": self.size * self.size,
            "constraints": len(self.constraints),
        }

        for row in self.grid:
            for cell in row:
                if cell.is_empty:
                    stats["empty_cells"] += 1
                else:
                    stats["filled_cells"] += 1
                    if cell.value is CellValue.ORANGE:
                        stats["orange_cells"] += 1
                    else:
                        stats["moon_cells"] += 1
                if cell.immutable:
                    stats["immutable_cells"] += 1

        return stats

    # =============================================================================
    # JSON IMPORT/EXPORT
    # =============================================================================

    def serialize(self) -> Dict[str, Any]:
        """
        Export size, grid, and constraints.

        Constraints are an ordered list of [key, constraint] pairs so the
        mapping is rebuilt in the same order.
        """
        return {
            "size": self.size,
            "grid": [[cell.to_dict() for cell in row] for row in self.grid],
            "constraints": [[key, c.to_dict()] for key, c in self.constraints.items()],
        }

    @classmethod
    def deserialize(cls, data: Dict[str, Any]) -> 'GridStore':
        """Create a GridStore from serialize() output."""
        store = cls(int(data["size"]))
        store.grid = [[Cell.from_dict(cell) for cell in row] for row in data["grid"]]
        store.constraints = {key: Constraint.from_dict(c) for key, c in data["constraints"]}
        return store

    def pretty(self) -> str:
        """Text view of the grid: O orange, M moon, . empty; pinned cells in brackets."""
        glyphs = {CellValue.EMPTY: ".", CellValue.ORANGE: "O", CellValue.MOON: "M"}
        lines: List[str] = []
        for row in self.grid:
            parts: List[str] = []
            for cell in row:
                glyph = glyphs[cell.value]
                parts.append(f"[{glyph}]" if cell.immutable else f" {glyph} ")
            lines.append("".join(parts))
        return "\n".join(lines)
