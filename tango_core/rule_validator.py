"""
Rule validation for Tango grids.

RuleValidator is a read-only view over a GridStore. Each rule family is
computed on demand and reported independently:
- adjacency: no symbol three times in a row along a row or column
- balance: no symbol more than ceil(size/2) times in a row or column
- constraint: filled constraint endpoints must respect equal / not-equal
"""
import math
from typing import List, Sequence

from tango_core.grid_store import GridStore
from tango_core.types import (
    SYMBOLS,
    AdjacencyViolation,
    BalanceViolation,
    CellValue,
    ConstraintKind,
    ConstraintViolation,
    Direction,
    ErrorCell,
    ValidationReport,
)

MAX_RUN = 2


class RuleValidator:
    """Computes rule violations of the bound grid. Never mutates it."""

    def __init__(self, grid: GridStore):
        self.grid = grid

    @property
    def balance_limit(self) -> int:
        return math.ceil(self.grid.size / 2)

    # ============================================
    # ADJACENCY
    # ============================================

    def validate_adjacent_limits(self) -> List[AdjacencyViolation]:
        """All row violations first (top to bottom), then all column violations."""
        errors: List[AdjacencyViolation] = []
        for index, line in enumerate(self.grid.rows()):
            errors.extend(self._scan_runs(line, Direction.ROW, index))
        for index, line in enumerate(self.grid.columns()):
            errors.extend(self._scan_runs(line, Direction.COLUMN, index))
        return errors

    @staticmethod
    def _scan_runs(line: Sequence[CellValue], direction: Direction, index: int) -> List[AdjacencyViolation]:
        """
        Report a window for every position where a run grows past MAX_RUN.

        A run of four yields two overlapping windows. The run starts on the
        first cell even when it is empty; an empty cell never extends a run.
        """
        errors: List[AdjacencyViolation] = []
        if not line:
            return errors

        run_length = 1
        run_value = line[0]
        for pos in range(1, len(line)):
            value = line[pos]
            if value is run_value and value.is_filled:
                run_length += 1
                if run_length > MAX_RUN:
                    errors.append(AdjacencyViolation(
                        direction=direction,
                        index=index,
                        start=pos - MAX_RUN,
                        end=pos,
                        value=value,
                    ))
            else:
                run_length = 1
                run_value = value
        return errors

    # ============================================
    # BALANCE
    # ============================================

    def validate_balance(self) -> List[BalanceViolation]:
        """One record per line per symbol over the cap; rows before columns."""
        errors: List[BalanceViolation] = []
        for index, line in enumerate(self.grid.rows()):
            errors.extend(self._check_line_balance(line, Direction.ROW, index))
        for index, line in enumerate(self.grid.columns()):
            errors.extend(self._check_line_balance(line, Direction.COLUMN, index))
        return errors

    def _check_line_balance(self, line: Sequence[CellValue], direction: Direction, index: int) -> List[BalanceViolation]:
        limit = self.balance_limit
        errors: List[BalanceViolation] = []
        for symbol in SYMBOLS:
            count = sum(1 for value in line if value is symbol)
            if count > limit:
                errors.append(BalanceViolation(
                    direction=direction,
                    index=index,
                    symbol=symbol,
                    count=count,
                    limit=limit,
                ))
        return errors

    # ============================================
    # CONSTRAINTS
    # ============================================

    def validate_constraints(self) -> List[ConstraintViolation]:
        """Broken constraints in insertion order. Half-filled ones are skipped."""
        errors: List[ConstraintViolation] = []
        for constraint in self.grid.get_constraints():
            value_a = self.grid.get_value(*constraint.cell_a)
            value_b = self.grid.get_value(*constraint.cell_b)
            if value_a is None or value_b is None:
                continue
            if not (value_a.is_filled and value_b.is_filled):
                continue

            are_equal = value_a is value_b
            if constraint.kind is ConstraintKind.EQUAL and not are_equal:
                errors.append(ConstraintViolation(constraint, value_a, value_b))
            elif constraint.kind is ConstraintKind.NOT_EQUAL and are_equal:
                errors.append(ConstraintViolation(constraint, value_a, value_b))
        return errors

    # ============================================
    # AGGREGATES
    # ============================================

    def validate_all(self) -> ValidationReport:
        return ValidationReport(
            adjacent=tuple(self.validate_adjacent_limits()),
            balance=tuple(self.validate_balance()),
            constraint=tuple(self.validate_constraints()),
        )

    def is_valid(self) -> bool:
        return self.validate_all().is_valid

    def get_error_cells(self) -> List[ErrorCell]:
        """
        Expand every violation into the positions it implicates.

        Order follows the report (adjacent, balance, constraint). A position
        hit by several violations appears once per violation.
        """
        size = self.grid.size
        cells: List[ErrorCell] = []
        for violation in self.validate_all().violations():
            for row, col in violation.cells(size):
                cells.append(ErrorCell(row, col, violation.category))
        return cells
