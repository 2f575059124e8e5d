"""Sample records and a scripted walk-through of the care-taker."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List

from undo_caretaker.core import CareTaker, Outcome, compare_by, match_by


@dataclass(slots=True)
class Record:
    """A simple record with a unique ``index``, a ``name`` and a ``value``."""

    index: int
    name: str
    value: str


SEED: tuple[tuple[int, str, str], ...] = (
    (1, "fred", "dancer"),
    (2, "arnold", "actor"),
    (3, "jack", "ripper"),
    (4, "tinker", "soldier"),
    (5, "boris", "politician"),
)

same_index = match_by("index")
by_name = compare_by("name")


def seed_records() -> List[Record]:
    """Fresh list of the sample records, sorted by name."""

    records = [Record(index, name, value) for index, name, value in SEED]
    records.sort(key=lambda record: record.name)
    return records


def make_caretaker(**kwargs: object) -> CareTaker[Record]:
    return CareTaker(same_index, by_name, **kwargs)  # type: ignore[arg-type]


@dataclass(slots=True)
class ScriptStep:
    label: str
    outcome: Outcome
    names: tuple[str, ...]


def run_script(
    records: List[Record] | None = None,
    caretaker: CareTaker[Record] | None = None,
) -> List[ScriptStep]:
    """Add, update and delete a record, then undo all three."""

    records = seed_records() if records is None else records
    caretaker = caretaker or make_caretaker()
    steps: List[ScriptStep] = []

    def step(label: str, outcome: Outcome) -> None:
        steps.append(
            ScriptStep(label, outcome, tuple(record.name for record in records))
        )

    step("add aram", caretaker.add(records, Record(6, "aram", "composer")))
    step("update fred", caretaker.update(records, Record(1, "fred", "accountant")))
    step("delete jack", caretaker.delete(records, Record(3, "jack", "ripper")))
    step("undo", caretaker.undo(records))
    step("undo", caretaker.undo(records))
    step("undo", caretaker.undo(records))
    return steps


def dump_records(records: List[Record]) -> List[Dict[str, object]]:
    return [asdict(record) for record in records]


__all__ = [
    "Record",
    "ScriptStep",
    "SEED",
    "by_name",
    "dump_records",
    "make_caretaker",
    "run_script",
    "same_index",
    "seed_records",
]
