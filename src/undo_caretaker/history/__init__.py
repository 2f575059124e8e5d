"""Action items and the undo/redo stacks that hold them."""

from .actions import Action, ActionItem
from .stack import HistoryStack, HistoryStats

__all__ = [
    "Action",
    "ActionItem",
    "HistoryStack",
    "HistoryStats",
]
