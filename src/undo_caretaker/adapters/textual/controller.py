"""Adapter wiring a bound care-taker into Textual-friendly UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from undo_caretaker.core import BoundCareTaker, Outcome
from undo_caretaker.demo.records import Record


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class CareTakerUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_records: Callable[[Sequence[str]], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualCareTakerAdapter:
    """Translates key presses into care-taker operations on sample records."""

    EVENTS = (
        "caretaker.add",
        "caretaker.update",
        "caretaker.delete",
        "caretaker.undo",
        "caretaker.redo",
    )

    def __init__(
        self,
        bound: BoundCareTaker[Record],
        hooks: CareTakerUIHooks,
        *,
        pending: Iterable[Record] = (),
    ) -> None:
        self.bound = bound
        self.hooks = hooks
        self.selected = 0
        self._pending: List[Record] = list(pending)
        self._handlers: Dict[str, Callable[[], Optional[Outcome]]] = {
            "a": self.add_next,
            "e": self.edit_selected,
            "d": self.delete_selected,
            "u": self.undo,
            "ctrl+r": self.redo,
            "up": lambda: self.move(-1),
            "down": lambda: self.move(1),
        }
        self._subscriptions: List[Tuple[str, Callable[[object], None]]] = []
        for event in self.EVENTS:
            callback = self._listener(event)
            bound.bus.subscribe(event, callback)
            self._subscriptions.append((event, callback))
        self._refresh()

    def close(self) -> None:
        """Stop listening to the care-taker bus."""

        for event, callback in self._subscriptions:
            self.bound.bus.unsubscribe(event, callback)
        self._subscriptions.clear()

    @property
    def records(self) -> List[Record]:
        return self.bound.collection  # type: ignore[return-value]

    def handle_key(self, key: str) -> Optional[Outcome]:
        handler = self._handlers.get(key.lower())
        if handler is None:
            return None
        outcome = handler()
        if outcome is not None and not outcome.applied:
            self.hooks.update_status(f"{key}: {outcome.reason}")
        self._refresh()
        return outcome

    def add_next(self) -> Optional[Outcome]:
        if not self._pending:
            self.hooks.update_status("no more samples")
            return None
        return self.bound.add(self._pending.pop(0))

    def edit_selected(self) -> Optional[Outcome]:
        current = self._current()
        if current is None:
            return None
        return self.bound.update(replace(current, value=current.value.upper()))

    def delete_selected(self) -> Optional[Outcome]:
        current = self._current()
        if current is None:
            return None
        return self.bound.delete(current)

    def undo(self) -> Outcome:
        return self.bound.undo()

    def redo(self) -> Outcome:
        return self.bound.redo()

    def move(self, delta: int) -> None:
        if self.records:
            self.selected = max(0, min(len(self.records) - 1, self.selected + delta))

    def render_lines(self) -> List[str]:
        lines = []
        for row, record in enumerate(self.records):
            marker = ">" if row == self.selected else " "
            lines.append(f"{marker} {record.index:>3}  {record.name:<10} {record.value}")
        return lines

    def _current(self) -> Optional[Record]:
        if not self.records:
            return None
        self.selected = min(self.selected, len(self.records) - 1)
        return self.records[self.selected]

    def _listener(self, name: str) -> Callable[[object], None]:
        def callback(payload: object) -> None:
            self._on_change(name, payload)

        return callback

    def _on_change(self, name: str, payload: object) -> None:
        stats = self.bound.stats()
        action = "?"
        if isinstance(payload, Outcome) and payload.action:
            action = payload.action.value
        self.hooks.update_status(
            f"{name}:{action} undo={stats.undo_depth} redo={stats.redo_depth}"
        )
        self.hooks.log(f"event -> {name} action={action}")

    def _refresh(self) -> None:
        if self.records:
            self.selected = min(self.selected, len(self.records) - 1)
        else:
            self.selected = 0
        self.hooks.update_records(self.render_lines())


__all__ = ["CareTakerUIHooks", "TextualCareTakerAdapter"]
