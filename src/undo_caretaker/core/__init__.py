"""Care-taker, outcomes, and the caller-facing contracts."""

from .caretaker import BoundCareTaker, CareTaker
from .contracts import Comparator, IdentityPredicate, compare_by, deep_snapshot, match_by
from .events import ChangeBus
from .outcome import EMPTY_HISTORY, NOT_FOUND, OK, Outcome

__all__ = [
    "BoundCareTaker",
    "CareTaker",
    "ChangeBus",
    "Comparator",
    "IdentityPredicate",
    "Outcome",
    "OK",
    "NOT_FOUND",
    "EMPTY_HISTORY",
    "compare_by",
    "deep_snapshot",
    "match_by",
]
