"""
Shared types for the Tango puzzle engine.
Separated to avoid circular imports between modules.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from tango_utils.coords import Position, constraint_key


class CellValue(Enum):
    """Possible values for grid cells."""
    EMPTY = "empty"
    ORANGE = "orange"
    MOON = "moon"

    @property
    def is_filled(self) -> bool:
        return self is not CellValue.EMPTY

    def opposite(self) -> 'CellValue':
        """The other symbol. EMPTY has no opposite and maps to itself."""
        if self is CellValue.ORANGE:
            return CellValue.MOON
        if self is CellValue.MOON:
            return CellValue.ORANGE
        return self


SYMBOLS: Tuple[CellValue, CellValue] = (CellValue.ORANGE, CellValue.MOON)


class ConstraintKind(Enum):
    """Relation a constraint imposes on its two cells."""
    EQUAL = "equal"
    NOT_EQUAL = "notequal"


class GameState(Enum):
    """Lifecycle states of a game session."""
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


class RuleCategory(Enum):
    """Rule families reported by the validator."""
    ADJACENT = "adjacent"
    BALANCE = "balance"
    CONSTRAINT = "constraint"


class Direction(Enum):
    """Line orientation used by adjacency and balance violations."""
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True)
class Cell:
    """One grid position: a value and whether the player may change it."""
    value: CellValue = CellValue.EMPTY
    immutable: bool = False

    @property
    def is_empty(self) -> bool:
        return self.value is CellValue.EMPTY

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value.value, "immutable": self.immutable}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Cell':
        return cls(CellValue(data["value"]), bool(data["immutable"]))


@dataclass(frozen=True)
class Constraint:
    """Equality or inequality relation between two cells."""
    cell_a: Position
    cell_b: Position
    kind: ConstraintKind

    @property
    def key(self) -> str:
        return constraint_key(self.cell_a[0], self.cell_a[1], self.cell_b[0], self.cell_b[1])

    def involves(self, row: int, col: int) -> bool:
        return (row, col) in (self.cell_a, self.cell_b)

    def other_end(self, row: int, col: int) -> Position:
        """Endpoint opposite (row, col). Assumes involves(row, col)."""
        return self.cell_b if self.cell_a == (row, col) else self.cell_a

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cellA": {"row": self.cell_a[0], "col": self.cell_a[1]},
            "cellB": {"row": self.cell_b[0], "col": self.cell_b[1]},
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Constraint':
        a, b = data["cellA"], data["cellB"]
        return cls(
            (int(a["row"]), int(a["col"])),
            (int(b["row"]), int(b["col"])),
            ConstraintKind(data["kind"]),
        )


@dataclass(frozen=True)
class MoveRecord:
    """A single player move, reversible through its previous value."""
    row: int
    col: int
    previous_value: CellValue
    new_value: CellValue
    timestamp: int

    def execute(self, grid) -> bool:
        """Re-apply the move. Returns True if the grid accepted it."""
        return grid.set_cell(self.row, self.col, self.new_value)

    def undo(self, grid) -> bool:
        """Put the previous value back. Returns True if the grid accepted it."""
        return grid.set_cell(self.row, self.col, self.previous_value)

    def get_description(self) -> str:
        return f"Set ({self.row}, {self.col}) {self.previous_value.value} → {self.new_value.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "previousValue": self.previous_value.value,
            "newValue": self.new_value.value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoveRecord':
        return cls(
            int(data["row"]),
            int(data["col"]),
            CellValue(data["previousValue"]),
            CellValue(data["newValue"]),
            int(data["timestamp"]),
        )


@dataclass(frozen=True)
class InitialPuzzleState:
    """Snapshot of a freshly generated puzzle, used by reset."""
    cells: Tuple[Tuple[Cell, ...], ...]
    constraints: Tuple[Constraint, ...]

    @property
    def size(self) -> int:
        return len(self.cells)


# =============================================================================
# VALIDATION RECORDS
# =============================================================================

class RuleViolation(ABC):
    """Base class for violations; subclasses know which cells they implicate."""
    category: RuleCategory

    @abstractmethod
    def cells(self, size: int) -> List[Position]:
        """Positions implicated on a grid of the given size."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        pass


@dataclass(frozen=True)
class AdjacencyViolation(RuleViolation):
    """Three identical symbols in a row; start..end is the 3-cell window."""
    direction: Direction
    index: int
    start: int
    end: int
    value: CellValue
    category: RuleCategory = field(default=RuleCategory.ADJACENT, init=False)

    def cells(self, size: int) -> List[Position]:
        if self.direction is Direction.ROW:
            return [(self.index, col) for col in range(self.start, self.end + 1)]
        return [(row, self.index) for row in range(self.start, self.end + 1)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.category.value,
            "direction": self.direction.value,
            "index": self.index,
            "start": self.start,
            "end": self.end,
            "value": self.value.value,
        }

    def __str__(self):
        return (f"ERROR: three {self.value.value} in a row in {self.direction.value} "
                f"{self.index} ({self.start}-{self.end})")


@dataclass(frozen=True)
class BalanceViolation(RuleViolation):
    """One symbol appears more than the per-line cap."""
    direction: Direction
    index: int
    symbol: CellValue
    count: int
    limit: int
    category: RuleCategory = field(default=RuleCategory.BALANCE, init=False)

    def cells(self, size: int) -> List[Position]:
        if self.direction is Direction.ROW:
            return [(self.index, col) for col in range(size)]
        return [(row, self.index) for row in range(size)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.category.value,
            "direction": self.direction.value,
            "index": self.index,
            "symbol": self.symbol.value,
            "count": self.count,
            "limit": self.limit,
        }

    def __str__(self):
        return (f"ERROR: {self.count} {self.symbol.value} in {self.direction.value} "
                f"{self.index} (max {self.limit})")


@dataclass(frozen=True)
class ConstraintViolation(RuleViolation):
    """Both ends of a constraint are filled and break its relation."""
    constraint: Constraint
    value_a: CellValue
    value_b: CellValue
    category: RuleCategory = field(default=RuleCategory.CONSTRAINT, init=False)

    def cells(self, size: int) -> List[Position]:
        return [self.constraint.cell_a, self.constraint.cell_b]

    def to_dict(self) -> Dict[str, Any]:
        data = self.constraint.to_dict()
        data.update({
            "type": self.category.value,
            "valueA": self.value_a.value,
            "valueB": self.value_b.value,
        })
        return data

    def __str__(self):
        return (f"ERROR: {self.constraint.kind.value} constraint broken between "
                f"{self.constraint.cell_a} and {self.constraint.cell_b}")


@dataclass(frozen=True)
class ErrorCell:
    """A grid position implicated by a violation, tagged with its rule."""
    row: int
    col: int
    category: RuleCategory

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "col": self.col, "type": self.category.value}


@dataclass(frozen=True)
class ValidationReport:
    """All violations of the current grid, grouped by rule category."""
    adjacent: Tuple[AdjacencyViolation, ...] = ()
    balance: Tuple[BalanceViolation, ...] = ()
    constraint: Tuple[ConstraintViolation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not (self.adjacent or self.balance or self.constraint)

    def violations(self) -> List[RuleViolation]:
        """All violations in category order: adjacent, balance, constraint."""
        return [*self.adjacent, *self.balance, *self.constraint]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adjacentErrors": [v.to_dict() for v in self.adjacent],
            "balanceErrors": [v.to_dict() for v in self.balance],
            "constraintErrors": [v.to_dict() for v in self.constraint],
        }


def coerce_value(value: Optional[Any]) -> Optional[CellValue]:
    """
    Accept a CellValue, its string form, or None (empty).

    Returns None for anything outside the vocabulary.
    """
    if isinstance(value, CellValue):
        return value
    if value is None:
        return CellValue.EMPTY
    try:
        return CellValue(value)
    except ValueError:
        return None
