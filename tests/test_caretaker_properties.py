from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List

import pytest

from undo_caretaker import CareTaker, compare_by, match_by

Row = Dict[str, Any]


def make_rows() -> List[Row]:
    return [
        {"id": 1, "name": "a"},
        {"id": 2, "name": "b"},
        {"id": 3, "name": "c"},
    ]


def make_caretaker() -> CareTaker[Row]:
    return CareTaker(match_by("id"), compare_by("name"))


def is_sorted(rows: List[Row]) -> bool:
    return all(left["name"] <= right["name"] for left, right in zip(rows, rows[1:]))


def depths(caretaker: CareTaker[Row]) -> tuple[int, int]:
    stats = caretaker.stats()
    return stats.undo_depth, stats.redo_depth


def test_undo_inverts_add() -> None:
    rows = make_rows()
    before = copy.deepcopy(rows)
    caretaker = make_caretaker()

    caretaker.add(rows, {"id": 9, "name": "bb"})
    caretaker.undo(rows)

    assert rows == before


def test_undo_inverts_delete() -> None:
    rows = make_rows()
    before = copy.deepcopy(rows)
    caretaker = make_caretaker()

    caretaker.delete(rows, {"id": 2})
    caretaker.undo(rows)

    assert rows == before


def test_undo_inverts_update() -> None:
    rows = make_rows()
    caretaker = make_caretaker()

    caretaker.update(rows, {"id": 3, "name": "c2", "extra": True})
    caretaker.undo(rows)

    assert rows[2] == {"id": 3, "name": "c"}


@pytest.mark.parametrize("target", [1, 2, 3])
def test_undo_inverts_delete_without_ordering(target: int) -> None:
    rows = [{"id": 1}, {"id": 2}, {"id": 3}]
    before = copy.deepcopy(rows)
    caretaker: CareTaker[Row] = CareTaker(match_by("id"))

    caretaker.delete(rows, {"id": target})
    caretaker.undo(rows)
    assert rows == before

    caretaker.redo(rows)
    caretaker.undo(rows)
    assert rows == before


def test_unordered_delete_restore_is_clamped_to_length() -> None:
    rows = [{"id": 1}, {"id": 2}, {"id": 3}]
    caretaker: CareTaker[Row] = CareTaker(match_by("id"))

    caretaker.delete(rows, {"id": 3})
    rows.clear()
    caretaker.undo(rows)

    assert rows == [{"id": 3}]


OPERATIONS: Dict[str, Callable[[CareTaker[Row], List[Row]], object]] = {
    "add": lambda ct, rows: ct.add(rows, {"id": 4, "name": "ab"}),
    "update": lambda ct, rows: ct.update(rows, {"id": 1, "name": "z"}),
    "delete": lambda ct, rows: ct.delete(rows, {"id": 2}),
}


@pytest.mark.parametrize("operation", sorted(OPERATIONS))
def test_redo_reapplies(operation: str) -> None:
    rows = make_rows()
    caretaker = make_caretaker()

    OPERATIONS[operation](caretaker, rows)
    after = copy.deepcopy(rows)
    caretaker.undo(rows)
    caretaker.redo(rows)

    assert rows == after
    assert is_sorted(rows)


@pytest.mark.parametrize("operation", sorted(OPERATIONS))
def test_stack_discipline(operation: str) -> None:
    rows = make_rows()
    caretaker = make_caretaker()
    assert caretaker.is_undo_empty()

    OPERATIONS[operation](caretaker, rows)
    assert depths(caretaker) == (1, 0)

    caretaker.undo(rows)
    assert depths(caretaker) == (0, 1)
    assert caretaker.is_undo_empty()

    caretaker.redo(rows)
    assert depths(caretaker) == (1, 0)


def test_collection_stays_sorted_through_mixed_sequence() -> None:
    rows = make_rows()
    caretaker = make_caretaker()
    steps: List[Callable[[], object]] = [
        lambda: caretaker.add(rows, {"id": 5, "name": "aa"}),
        lambda: caretaker.update(rows, {"id": 2, "name": "zz"}),
        lambda: caretaker.delete(rows, {"id": 1}),
        lambda: caretaker.undo(rows),
        lambda: caretaker.undo(rows),
        lambda: caretaker.redo(rows),
        lambda: caretaker.add(rows, {"id": 6, "name": "0"}),
        lambda: caretaker.undo(rows),
        lambda: caretaker.undo(rows),
    ]

    for step in steps:
        step()
        assert is_sorted(rows)


@pytest.mark.parametrize("operation", ["update", "delete"])
def test_missing_target_changes_nothing(operation: str) -> None:
    rows = make_rows()
    caretaker = make_caretaker()
    caretaker.add(rows, {"id": 4, "name": "d"})
    caretaker.undo(rows)
    before = copy.deepcopy(rows)

    method = getattr(caretaker, operation)
    outcome = method(rows, {"id": 404, "name": "nope"})

    assert not outcome.applied
    assert rows == before
    assert depths(caretaker) == (0, 1)


def test_documented_walkthrough() -> None:
    rows = make_rows()
    caretaker = make_caretaker()

    caretaker.add(rows, {"id": 4, "name": "d"})
    assert [row["name"] for row in rows] == ["a", "b", "c", "d"]
    assert depths(caretaker) == (1, 0)

    caretaker.update(rows, {"id": 1, "name": "a2"})
    assert rows[0] == {"id": 1, "name": "a2"}
    assert depths(caretaker) == (2, 0)

    caretaker.undo(rows)
    assert rows[0] == {"id": 1, "name": "a"}
    assert depths(caretaker) == (1, 1)

    caretaker.undo(rows)
    assert [row["name"] for row in rows] == ["a", "b", "c"]
    assert depths(caretaker) == (0, 2)

    caretaker.redo(rows)
    assert [row["name"] for row in rows] == ["a", "b", "c", "d"]
    assert depths(caretaker) == (1, 1)
