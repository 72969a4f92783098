"""
Coordinate helpers for square grids.

Positions are (row, col) tuples in memory and "row,col" strings in serialized
data. Constraint ids join two position strings with a dash: "r1,c1-r2,c2".
"""
from typing import Tuple

Position = Tuple[int, int]


def coordinate_to_string(row: int, col: int) -> str:
    """Convert coordinate tuple to string format used in JSON."""
    return f"{row},{col}"


def constraint_key(row1: int, col1: int, row2: int, col2: int) -> str:
    """
    Build the canonical id of a constraint.

    The two positions keep the order they were given in, so (0,0)-(0,1) and
    (0,1)-(0,0) are distinct keys.
    """
    return f"{coordinate_to_string(row1, col1)}-{coordinate_to_string(row2, col2)}"
