"""Paired undo/redo stacks of action items."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Generic, Optional, TypeVar

from .actions import ActionItem

I = TypeVar("I")


@dataclass(slots=True)
class HistoryStats:
    """Lightweight snapshot describing stack depths."""

    undo_depth: int
    redo_depth: int
    max_depth: Optional[int]


class HistoryStack(Generic[I]):
    """Holds undo and redo stacks side by side.

    Both stacks are strictly last-in-first-out and share no state. Popping an
    empty stack returns ``None``. History is unbounded unless ``max_depth`` is
    given, in which case each stack keeps only its newest ``max_depth`` items.
    """

    def __init__(self, *, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self.max_depth = max_depth
        self._undo: Deque[ActionItem[I]] = deque(maxlen=max_depth)
        self._redo: Deque[ActionItem[I]] = deque(maxlen=max_depth)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def push_undo(self, action_item: ActionItem[I]) -> None:
        self._undo.append(action_item)

    def pop_undo(self) -> Optional[ActionItem[I]]:
        if not self._undo:
            return None
        return self._undo.pop()

    def peek_undo(self) -> Optional[ActionItem[I]]:
        return self._undo[-1] if self._undo else None

    def is_undo_empty(self) -> bool:
        return not self._undo

    def push_redo(self, action_item: ActionItem[I]) -> None:
        self._redo.append(action_item)

    def pop_redo(self) -> Optional[ActionItem[I]]:
        if not self._redo:
            return None
        return self._redo.pop()

    def peek_redo(self) -> Optional[ActionItem[I]]:
        return self._redo[-1] if self._redo else None

    def is_redo_empty(self) -> bool:
        return not self._redo

    def clear_undo(self) -> None:
        self._undo.clear()

    def clear_redo(self) -> None:
        self._redo.clear()

    def clear(self) -> None:
        self.clear_undo()
        self.clear_redo()

    def stats(self) -> HistoryStats:
        return HistoryStats(
            undo_depth=self.undo_depth,
            redo_depth=self.redo_depth,
            max_depth=self.max_depth,
        )


__all__ = ["HistoryStack", "HistoryStats"]
