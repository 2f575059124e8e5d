"""Demonstration data for the care-taker."""

from .records import Record, ScriptStep, dump_records, make_caretaker, run_script, seed_records

__all__ = [
    "Record",
    "ScriptStep",
    "dump_records",
    "make_caretaker",
    "run_script",
    "seed_records",
]
