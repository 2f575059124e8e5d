"""Undo/redo care-taker for ordered collections of identifiable records."""

from .core import BoundCareTaker, CareTaker, Outcome, compare_by, match_by
from .history import Action, ActionItem, HistoryStack

__all__ = [
    "Action",
    "ActionItem",
    "BoundCareTaker",
    "CareTaker",
    "HistoryStack",
    "Outcome",
    "compare_by",
    "match_by",
]

__version__ = "0.1.0"
