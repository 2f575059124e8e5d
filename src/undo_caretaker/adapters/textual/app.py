"""Executable Textual app demonstrating undo/redo over sample records."""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use undo_caretaker.adapters.textual.app"
    ) from exc

from undo_caretaker.demo.records import (
    Record,
    dump_records,
    make_caretaker,
    run_script,
    seed_records,
)
from undo_caretaker.runtime import CareTakerSettings

from .controller import CareTakerUIHooks, TextualCareTakerAdapter

EXTRA_SAMPLES = (
    Record(6, "aram", "composer"),
    Record(7, "zelda", "princess"),
    Record(8, "mona", "painter"),
)
HELP_TEXT = "a add  e edit  d delete  u undo  ctrl+r redo  up/down select"


@dataclass
class UIState:
    records_text: str = ""
    status_text: str = ""


class CareTakerApp(App[None]):
    """Minimal Textual UI over a sorted list of sample records."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#records-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, history_depth: Optional[int] = None) -> None:
        super().__init__()
        self._state = UIState()
        self._history_depth = history_depth
        self.adapter: TextualCareTakerAdapter | None = None
        self._records_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._records_widget = Static("", id="records-view")
        self._status_widget = Static(HELP_TEXT, id="status-line")
        yield self._records_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        caretaker = make_caretaker(max_depth=self._history_depth)
        hooks = CareTakerUIHooks(
            update_records=self._update_records,
            update_status=self._update_status,
        )
        self.adapter = TextualCareTakerAdapter(
            caretaker.bind(seed_records()), hooks, pending=EXTRA_SAMPLES
        )

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_key(event.key)
        event.stop()

    def _update_records(self, lines: Sequence[str]) -> None:
        self._state.records_text = "\n".join(lines) or "(empty)"
        if self._records_widget:
            self._records_widget.update(self._state.records_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)


def script_report() -> List[dict]:
    """Run the scripted walk-through and describe every step."""

    records = seed_records()
    report = []
    for step in run_script(records):
        report.append(
            {
                "step": step.label,
                "applied": step.outcome.applied,
                "reason": step.outcome.reason,
                "names": list(step.names),
            }
        )
    report.append({"step": "final", "records": dump_records(records)})
    return report


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    settings = CareTakerSettings.from_env(os.environ)
    parser = argparse.ArgumentParser(description="Run the undo care-taker demo.")
    parser.add_argument(
        "--script",
        action="store_true",
        help="Print the scripted walk-through as JSON instead of starting the UI",
    )
    parser.add_argument(
        "--history-depth",
        type=int,
        default=settings.history_depth,
        help="Cap each history stack (default: UNDO_CARETAKER_HISTORY_DEPTH or unbounded)",
    )
    args = parser.parse_args(argv)
    if args.history_depth is not None and args.history_depth <= 0:
        parser.error("--history-depth must be a positive integer")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.script:
        print(json.dumps(script_report(), indent=2))
        return
    app = CareTakerApp(history_depth=args.history_depth)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
