"""Action kinds and the reversible action items stored in history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

I = TypeVar("I")


class Action(str, Enum):
    """Mutation kinds that can be undone and redone."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True)
class ActionItem(Generic[I]):
    """One recorded mutation.

    ``item`` is the inserted record for ``ADD`` and the removed record for
    ``DELETE``. For ``UPDATE`` it holds a snapshot of the value that is *not*
    currently in the collection; undo and redo swap it with the live entry, so
    the same instance toggles between the two versions.

    ``index`` is the position a ``DELETE`` removed the record from, used to
    put it back when the collection has no ordering.
    """

    action: Action
    item: I
    index: Optional[int] = None

    @property
    def label(self) -> str:
        return self.action.value


__all__ = ["Action", "ActionItem"]
