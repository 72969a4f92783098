"""
GridStore tests:
- bounds checks on reads and writes
- immutable cells resist set_cell
- constraint upsert keeps insertion order
- clear / snapshot / restore / serialize round trip
"""

import dataclasses
import json
import pytest

from tango_core.grid_store import GridStore
from tango_core.types import Cell, CellValue, ConstraintKind


def test_new_grid_is_empty_and_mutable():
    g = GridStore(4)
    assert g.size == 4
    for row, col in g.positions():
        assert g.get_cell(row, col) == Cell(CellValue.EMPTY, False)
    assert g.get_constraints() == []


@pytest.mark.parametrize("size", [0, -3])
def test_non_positive_size_rejected(size):
    with pytest.raises(ValueError):
        GridStore(size)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (4, 0), (0, 4), (7, 7)])
def test_out_of_bounds_access(row, col):
    g = GridStore(4)
    assert g.get_cell(row, col) is None
    assert g.set_cell(row, col, CellValue.ORANGE) is False
    assert g.set_immutable(row, col, CellValue.MOON) is False


def test_set_cell_writes_value():
    g = GridStore(4)
    assert g.set_cell(1, 2, CellValue.MOON) is True
    assert g.get_cell(1, 2).value is CellValue.MOON
    assert g.set_cell(1, 2, CellValue.EMPTY) is True
    assert g.get_cell(1, 2).is_empty


def test_immutable_cell_never_changes():
    g = GridStore(4)
    assert g.set_immutable(0, 0, CellValue.ORANGE)
    for value in (CellValue.MOON, CellValue.EMPTY, CellValue.ORANGE, CellValue.MOON):
        assert g.set_cell(0, 0, value) is False
        assert g.get_cell(0, 0) == Cell(CellValue.ORANGE, True)


def test_returned_cell_cannot_bypass_immutability():
    g = GridStore(3)
    g.set_immutable(1, 1, CellValue.MOON)
    cell = g.get_cell(1, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cell.value = CellValue.ORANGE
    assert g.get_cell(1, 1).value is CellValue.MOON


def test_add_constraint_bounds_and_key():
    g = GridStore(4)
    assert g.add_constraint(0, 1, 0, 2, ConstraintKind.EQUAL) is True
    assert g.add_constraint(0, 3, 0, 4, ConstraintKind.EQUAL) is False
    assert g.add_constraint(-1, 0, 0, 0, ConstraintKind.NOT_EQUAL) is False
    assert list(g.constraints.keys()) == ["0,1-0,2"]


def test_constraint_upsert_overwrites_in_place():
    g = GridStore(4)
    g.add_constraint(0, 0, 0, 1, ConstraintKind.EQUAL)
    g.add_constraint(2, 2, 3, 2, ConstraintKind.NOT_EQUAL)
    g.add_constraint(0, 0, 0, 1, ConstraintKind.NOT_EQUAL)

    constraints = g.get_constraints()
    assert [c.key for c in constraints] == ["0,0-0,1", "2,2-3,2"]
    assert constraints[0].kind is ConstraintKind.NOT_EQUAL


def test_reversed_positions_are_a_distinct_key():
    g = GridStore(4)
    g.add_constraint(0, 0, 0, 1, ConstraintKind.EQUAL)
    g.add_constraint(0, 1, 0, 0, ConstraintKind.EQUAL)
    assert len(g.get_constraints()) == 2


def test_constraints_for_filters_by_endpoint():
    g = GridStore(4)
    g.add_constraint(0, 0, 0, 1, ConstraintKind.EQUAL)
    g.add_constraint(1, 1, 2, 1, ConstraintKind.EQUAL)
    g.add_constraint(0, 1, 1, 1, ConstraintKind.NOT_EQUAL)
    assert [c.key for c in g.constraints_for(0, 1)] == ["0,0-0,1", "0,1-1,1"]
    assert g.constraints_for(3, 3) == []


def test_clear_keeps_immutable_cells_and_constraints(make_grid):
    g = make_grid(["oM..", ".Om.", "....", "M..."], constraints=[((0, 0), (0, 1), "equal")])
    g.clear()
    assert g.pretty().splitlines()[0].startswith("[O]")
    assert g.get_cell(0, 0) == Cell(CellValue.ORANGE, True)
    assert g.get_cell(1, 2) == Cell(CellValue.MOON, True)
    assert g.get_cell(0, 1).is_empty
    assert g.get_cell(1, 1).is_empty
    assert g.get_cell(3, 0).is_empty
    assert len(g.get_constraints()) == 1


def test_is_full(make_grid):
    assert make_grid(["OM", "Mo"]).is_full()
    assert not make_grid(["OM", "M."]).is_full()


def test_rows_and_columns_views(make_grid):
    g = make_grid(["OM.", "...", "M.o"])
    O, M, E = CellValue.ORANGE, CellValue.MOON, CellValue.EMPTY
    assert g.rows()[0] == [O, M, E]
    assert g.columns()[0] == [O, E, M]
    assert g.columns()[2] == [E, E, O]


def test_snapshot_is_not_aliased():
    g = GridStore(3)
    g.set_immutable(0, 0, CellValue.ORANGE)
    g.add_constraint(1, 1, 1, 2, ConstraintKind.EQUAL)
    snap = g.snapshot()

    g.set_cell(2, 2, CellValue.MOON)
    g.add_constraint(0, 1, 0, 2, ConstraintKind.NOT_EQUAL)

    assert snap.cells[2][2].is_empty
    assert len(snap.constraints) == 1

    g.restore(snap)
    assert g.get_cell(2, 2).is_empty
    assert g.get_cell(0, 0) == Cell(CellValue.ORANGE, True)
    assert [c.key for c in g.get_constraints()] == ["1,1-1,2"]

    # restored grid is a fresh list; writing to it leaves the snapshot alone
    g.set_cell(1, 0, CellValue.MOON)
    assert snap.cells[1][0].is_empty


def test_restore_rejects_other_size():
    snap = GridStore(3).snapshot()
    with pytest.raises(ValueError):
        GridStore(4).restore(snap)


def test_serialize_round_trip(make_grid):
    g = make_grid(
        ["oM..", ".O.m", "....", "M..."],
        constraints=[((2, 0), (2, 1), "notequal"), ((0, 2), (1, 2), "equal")],
    )
    data = json.loads(json.dumps(g.serialize()))

    assert data["size"] == 4
    assert data["grid"][0][0] == {"value": "orange", "immutable": True}
    assert [pair[0] for pair in data["constraints"]] == ["2,0-2,1", "0,2-1,2"]

    restored = GridStore.deserialize(data)
    assert restored.serialize() == g.serialize()
    assert restored.get_constraints() == g.get_constraints()


def test_statistics(make_grid):
    g = make_grid(["oM..", ".O.m", "....", "M..."], constraints=[((2, 0), (2, 1), "equal")])
    stats = g.get_statistics()
    assert stats["total_cells"] == 16
    assert stats["filled_cells"] == 5
    assert stats["empty_cells"] == 11
    assert stats["immutable_cells"] == 2
    assert stats["orange_cells"] == 2
    assert stats["moon_cells"] == 3
    assert stats["constraints"] == 1


def test_pretty_marks_pinned_cells(make_grid):
    text = make_grid(["oM", ".m"]).pretty()
    assert text.splitlines() == ["[O] M ", " . [M]"]
