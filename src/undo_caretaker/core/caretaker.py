"""Care-taker coordinating collection mutations with undo/redo history."""

from __future__ import annotations

from contextlib import contextmanager
from functools import cmp_to_key
from typing import (
    Any,
    Callable,
    Generic,
    Iterator,
    MutableSequence,
    Optional,
    TypeVar,
)

from undo_caretaker.history import Action, ActionItem, HistoryStack, HistoryStats
from undo_caretaker.runtime import CareTakerSettings, telemetry

from .contracts import Comparator, IdentityPredicate, Snapshot, deep_snapshot
from .events import ChangeBus
from .outcome import Outcome

I = TypeVar("I")


class CareTaker(Generic[I]):
    """Applies add/update/delete to a caller-owned list and records them.

    The collection is passed into every call and only ever mutated in place.
    Records are located with ``matches(candidate, target)`` rather than ``==``
    so they may carry fields that play no part in identity. When ``compare``
    (or ``sort_key``) is configured the collection is re-sorted after each
    change; otherwise insertion order is kept and an undone delete goes back
    to the position it was removed from.

    A new edit does not clear the redo stack. Callers wanting editor-style
    history call :meth:`clear_redo` themselves after a fresh edit.

    ``max_depth`` defaults to ``UNDO_CARETAKER_HISTORY_DEPTH`` (unbounded when
    unset). ``logger_name`` defaults to the logger configured through
    ``UNDO_CARETAKER_LOGGER``.

    Subscribers on :attr:`bus` are notified after the operation has been
    applied and recorded. An exception raised by a subscriber propagates to
    the caller, but the mutation and its history entry stay in place.
    """

    def __init__(
        self,
        matches: IdentityPredicate[I],
        compare: Optional[Comparator[I]] = None,
        *,
        sort_key: Optional[Callable[[I], Any]] = None,
        snapshot: Optional[Snapshot[I]] = None,
        max_depth: Optional[int] = None,
        history: Optional[HistoryStack[I]] = None,
        bus: Optional[ChangeBus] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        if not callable(matches):
            raise TypeError("matches must be callable")
        if compare is not None and sort_key is not None:
            raise ValueError("Provide either `compare` or `sort_key`, not both.")
        if compare is not None and not callable(compare):
            raise TypeError("compare must be callable")
        if sort_key is not None and not callable(sort_key):
            raise TypeError("sort_key must be callable")
        if snapshot is not None and not callable(snapshot):
            raise TypeError("snapshot must be callable")
        if history is not None and max_depth is not None:
            raise ValueError("max_depth is taken from `history` when one is given")
        if history is None and max_depth is None:
            max_depth = CareTakerSettings.from_env().history_depth

        self.matches = matches
        self.compare = compare
        self._sort_key: Optional[Callable[[I], Any]] = (
            cmp_to_key(compare) if compare is not None else sort_key
        )
        self.snapshot: Snapshot[I] = snapshot or deep_snapshot
        self.history: HistoryStack[I] = history or HistoryStack(max_depth=max_depth)
        self.bus = bus or ChangeBus()
        self._logger_name = logger_name

    @property
    def sorted(self) -> bool:
        return self._sort_key is not None

    # -- mutations -----------------------------------------------------------------

    def add(self, collection: MutableSequence[I], item: I) -> Outcome:
        """Append ``item``, re-sort, and record it. Duplicates are not rejected."""

        with self._span("add", collection) as handle:
            collection.append(item)
            self._resort(collection)
            self.history.push_undo(ActionItem(Action.ADD, item))
            outcome = self._finish("add", Outcome.done(Action.ADD, item), handle)
        return self._publish("add", outcome)

    def update(self, collection: MutableSequence[I], new_item: I) -> Outcome:
        """Replace the entry matching ``new_item``; no-op when none matches."""

        with self._span("update", collection) as handle:
            index = self._find(collection, new_item)
            if index < 0:
                return self._finish(
                    "update", Outcome.not_found(Action.UPDATE, new_item), handle
                )
            # The live entry is overwritten next, so keep an independent copy.
            self.history.push_undo(
                ActionItem(Action.UPDATE, self.snapshot(collection[index]))
            )
            collection[index] = new_item
            self._resort(collection)
            outcome = self._finish(
                "update", Outcome.done(Action.UPDATE, new_item), handle
            )
        return self._publish("update", outcome)

    def delete(self, collection: MutableSequence[I], item: I) -> Outcome:
        """Remove the entry matching ``item``; no-op when none matches."""

        with self._span("delete", collection) as handle:
            index = self._find(collection, item)
            if index < 0:
                return self._finish(
                    "delete", Outcome.not_found(Action.DELETE, item), handle
                )
            removed = collection.pop(index)
            self.history.push_undo(ActionItem(Action.DELETE, removed, index))
            outcome = self._finish(
                "delete", Outcome.done(Action.DELETE, removed), handle
            )
        return self._publish("delete", outcome)

    # -- history -------------------------------------------------------------------

    def undo(self, collection: MutableSequence[I]) -> Outcome:
        """Reverse the most recent recorded action and move it to the redo stack."""

        with self._span("undo", collection) as handle:
            action_item = self.history.pop_undo()
            if action_item is None:
                return self._finish("undo", Outcome.empty(), handle)
            if not self._replay(collection, action_item, forward=False):
                return self._finish(
                    "undo",
                    Outcome.not_found(action_item.action, action_item.item),
                    handle,
                )
            self.history.push_redo(action_item)
            outcome = self._finish(
                "undo", Outcome.done(action_item.action, action_item.item), handle
            )
        return self._publish("undo", outcome)

    def redo(self, collection: MutableSequence[I]) -> Outcome:
        """Reapply the most recently undone action and move it back to undo."""

        with self._span("redo", collection) as handle:
            action_item = self.history.pop_redo()
            if action_item is None:
                return self._finish("redo", Outcome.empty(), handle)
            if not self._replay(collection, action_item, forward=True):
                return self._finish(
                    "redo",
                    Outcome.not_found(action_item.action, action_item.item),
                    handle,
                )
            self.history.push_undo(action_item)
            outcome = self._finish(
                "redo", Outcome.done(action_item.action, action_item.item), handle
            )
        return self._publish("redo", outcome)

    def is_undo_empty(self) -> bool:
        return self.history.is_undo_empty()

    def is_redo_empty(self) -> bool:
        return self.history.is_redo_empty()

    def can_undo(self) -> bool:
        return not self.history.is_undo_empty()

    def can_redo(self) -> bool:
        return not self.history.is_redo_empty()

    def clear_redo(self) -> None:
        self.history.clear_redo()

    def clear(self) -> None:
        self.history.clear()

    def stats(self) -> HistoryStats:
        return self.history.stats()

    def bind(self, collection: MutableSequence[I]) -> "BoundCareTaker[I]":
        """Return a view that always operates on ``collection``."""

        return BoundCareTaker(self, collection)

    # -- internals -----------------------------------------------------------------

    def _replay(
        self,
        collection: MutableSequence[I],
        action_item: ActionItem[I],
        *,
        forward: bool,
    ) -> bool:
        if action_item.action is Action.UPDATE:
            return self._swap(collection, action_item)
        inserting = (action_item.action is Action.ADD) == forward
        if inserting:
            self._insert(collection, action_item)
            return True
        index = self._remove(collection, action_item.item)
        if index < 0:
            return False
        if action_item.action is Action.DELETE:
            action_item.index = index
        return True

    def _insert(
        self, collection: MutableSequence[I], action_item: ActionItem[I]
    ) -> None:
        if self._sort_key is None and action_item.index is not None:
            index = min(action_item.index, len(collection))
            collection.insert(index, action_item.item)
            return
        collection.append(action_item.item)
        self._resort(collection)

    def _swap(self, collection: MutableSequence[I], action_item: ActionItem[I]) -> bool:
        index = self._find(collection, action_item.item)
        if index < 0:
            return False
        displaced = self.snapshot(collection[index])
        collection[index] = action_item.item
        action_item.item = displaced
        self._resort(collection)
        return True

    def _find(self, collection: MutableSequence[I], target: I) -> int:
        for index, candidate in enumerate(collection):
            if self.matches(candidate, target):
                return index
        return -1

    def _remove(self, collection: MutableSequence[I], item: I) -> int:
        # Prefer the exact recorded object; an undone update may have swapped
        # in a snapshot of it, so fall back to the identity predicate.
        index = next(
            (i for i, candidate in enumerate(collection) if candidate is item), -1
        )
        if index < 0:
            index = self._find(collection, item)
        if index >= 0:
            del collection[index]
        return index

    def _resort(self, collection: MutableSequence[I]) -> None:
        if self._sort_key is None:
            return
        if hasattr(collection, "sort"):
            collection.sort(key=self._sort_key)  # type: ignore[attr-defined]
        else:
            collection[:] = sorted(collection, key=self._sort_key)

    @contextmanager
    def _span(
        self, operation: str, collection: MutableSequence[I]
    ) -> Iterator[telemetry.SpanHandle]:
        with telemetry.span(
            f"caretaker::{operation}",
            logger_name=self._logger_name,
            component="caretaker",
            metadata={"operation": operation, "size": len(collection)},
        ) as handle:
            yield handle

    def _finish(
        self, operation: str, outcome: Outcome, handle: telemetry.SpanHandle
    ) -> Outcome:
        stats = self.history.stats()
        data = {
            "applied": outcome.applied,
            "action": outcome.action.value if outcome.action else None,
            "reason": outcome.reason,
            "undo_depth": stats.undo_depth,
            "redo_depth": stats.redo_depth,
        }
        if not outcome.applied:
            handle.skip(outcome.reason)
        telemetry.record_event(
            f"caretaker.{operation}",
            level="debug",
            data=data,
            logger_name=self._logger_name,
        )
        return outcome

    def _publish(self, operation: str, outcome: Outcome) -> Outcome:
        self.bus.emit(f"caretaker.{operation}", outcome)
        return outcome


class BoundCareTaker(Generic[I]):
    """A care-taker tied to one collection at construction."""

    def __init__(self, caretaker: CareTaker[I], collection: MutableSequence[I]) -> None:
        self.caretaker = caretaker
        self.collection = collection

    @property
    def history(self) -> HistoryStack[I]:
        return self.caretaker.history

    @property
    def bus(self) -> ChangeBus:
        return self.caretaker.bus

    def add(self, item: I) -> Outcome:
        return self.caretaker.add(self.collection, item)

    def update(self, new_item: I) -> Outcome:
        return self.caretaker.update(self.collection, new_item)

    def delete(self, item: I) -> Outcome:
        return self.caretaker.delete(self.collection, item)

    def undo(self) -> Outcome:
        return self.caretaker.undo(self.collection)

    def redo(self) -> Outcome:
        return self.caretaker.redo(self.collection)

    def is_undo_empty(self) -> bool:
        return self.caretaker.is_undo_empty()

    def is_redo_empty(self) -> bool:
        return self.caretaker.is_redo_empty()

    def clear_redo(self) -> None:
        self.caretaker.clear_redo()

    def stats(self) -> HistoryStats:
        return self.caretaker.stats()


__all__ = ["CareTaker", "BoundCareTaker"]
