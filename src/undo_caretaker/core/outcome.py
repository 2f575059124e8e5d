"""Result values returned by every care-taker operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from undo_caretaker.history import Action

OK = "ok"
NOT_FOUND = "not_found"
EMPTY_HISTORY = "empty_history"


@dataclass(frozen=True, slots=True)
class Outcome:
    """What an operation did.

    ``applied`` is ``False`` for the no-op paths (missing target, empty
    history); ``reason`` says which one. Truthiness follows ``applied``.
    """

    applied: bool
    action: Optional[Action] = None
    reason: str = OK
    item: Any = None

    def __bool__(self) -> bool:
        return self.applied

    @classmethod
    def done(cls, action: Action, item: Any) -> "Outcome":
        return cls(applied=True, action=action, item=item)

    @classmethod
    def not_found(cls, action: Optional[Action], item: Any = None) -> "Outcome":
        return cls(applied=False, action=action, reason=NOT_FOUND, item=item)

    @classmethod
    def empty(cls) -> "Outcome":
        return cls(applied=False, reason=EMPTY_HISTORY)


__all__ = ["Outcome", "OK", "NOT_FOUND", "EMPTY_HISTORY"]
