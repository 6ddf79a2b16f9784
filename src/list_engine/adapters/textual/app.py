"""Executable Textual app that hosts an ordered list."""

from __future__ import annotations

import argparse
import os
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use list_engine.adapters.textual.app"
    ) from exc

from list_engine.collection import ListOptions, ListSnapshot, OrderedList
from list_engine.runtime import telemetry

from .controller import TextualListAdapter, TextualUIHooks

DEFAULT_ITEMS = ("alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf")


def render_snapshot(snapshot: ListSnapshot) -> str:
    """Plain-text rendering: one item per line, selected items starred."""

    selected = set(snapshot.selection.indices()) if snapshot.selection else set()
    lines = []
    for index, item in enumerate(snapshot.items):
        marker = "*" if index in selected else " "
        lines.append(f"{marker} {index:>3}  {item.content}")
    return "\n".join(lines)


class ListEngineApp(App[None]):
    """Minimal Textual UI driving an OrderedList from the keyboard."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#list-view {
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

    def __init__(self, items: Sequence[str], *, selection_mode: str = "multi") -> None:
        super().__init__()
        self.ordered = OrderedList(
            items, options=ListOptions(id="demo", selection=selection_mode)
        )
        self.adapter: TextualListAdapter | None = None
        self._list_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="list-area"):
            self._list_widget = Static("", id="list-view")
            yield self._list_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_list=self._update_list,
            update_status=self._update_status,
        )
        self.adapter = TextualListAdapter(self.ordered, hooks)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        if self.adapter.handle_textual_key(event.key):
            event.stop()

    def _update_list(self, snapshot: ListSnapshot) -> None:
        if self._list_widget:
            self._list_widget.update(render_snapshot(snapshot))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the list engine Textual demo.")
    parser.add_argument("items", nargs="*", help="Items to show (default: NATO words)")
    parser.add_argument(
        "--single",
        action="store_true",
        help="Restrict the list to single-item selection",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("LIST_ENGINE_LOG_PRESET", "quiet"),
        choices=telemetry.PRESETS,
        help="Telemetry preset (default: quiet, console logging fights the TUI)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    app = ListEngineApp(
        args.items or DEFAULT_ITEMS,
        selection_mode="single" if args.single else "multi",
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
