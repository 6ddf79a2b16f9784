"""Textual-facing adapter: list snapshots out, key presses and drops in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from list_engine.collection import ListSnapshot, OrderedList
from list_engine.errors import ListError
from list_engine.runtime import telemetry
from list_engine.selection import ListSelection
from list_engine.slots import ABOVE, BELOW, HoverData, find_insertion, find_move


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_list: Callable[[ListSnapshot], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualListAdapter:
    """Bridges an ``OrderedList`` to a Textual-friendly surface."""

    def __init__(self, ordered: OrderedList, hooks: TextualUIHooks) -> None:
        self.list = ordered
        self.hooks = hooks
        self._commands: Dict[str, Callable[[], None]] = {
            "up": self._cursor_up,
            "down": self._cursor_down,
            "shift+up": lambda: self._extend(-1),
            "shift+down": lambda: self._extend(1),
            "ctrl+up": lambda: self._shift_selection(ABOVE),
            "ctrl+down": lambda: self._shift_selection(BELOW),
            "space": self._toggle_focused,
            "delete": self._delete_selection,
            "escape": lambda: self.list.select(None),
        }
        self._unsubscribe = self.list.subscribe(self._on_change)
        self.hooks.update_list(self.list.snapshot("initial"))

    def close(self) -> None:
        self._unsubscribe()

    def handle_textual_key(self, key: str) -> bool:
        """Run the list command bound to ``key``; return whether it was handled."""

        command = self._commands.get(key.lower())
        self.hooks.log(f"key -> {key!r} bound={command is not None}")
        if command is None:
            return False
        telemetry.record_event("adapter.key", level="debug", data={"key": key})
        self._guarded(command)
        return True

    def preview_drop(self, slot: int) -> int:
        """Effective target for dropping the current selection at ``slot``."""

        return find_move(slot, self.list.selection)

    def handle_drop(self, slot: int) -> None:
        """Move the current selection to the raw drop ``slot``."""

        selection = self.list.selection
        if selection is None:
            self.hooks.update_status("nothing to move")
            return
        self.hooks.log(f"drop -> slot={slot} target={self.preview_drop(slot)}")
        self._guarded(lambda: self.list.move(selection, slot))

    def _guarded(self, command: Callable[[], None]) -> None:
        try:
            command()
        except ListError as exc:
            self.hooks.update_status(f"error: {exc}")
            self.hooks.log(f"error <- {type(exc).__name__}: {exc}")

    def _on_change(self, snapshot: ListSnapshot) -> None:
        self.hooks.update_list(snapshot)
        self.hooks.update_status(f"{snapshot.label}: {snapshot.selection or '-'}")

    def _focused_index(self) -> Optional[int]:
        focused = self.list.focused
        if focused is None:
            return None
        return self.list.index_of(focused.key)

    def _cursor_up(self) -> None:
        if self._ensure_cursor():
            self.list.up()

    def _cursor_down(self) -> None:
        if self._ensure_cursor():
            self.list.down()

    def _ensure_cursor(self) -> bool:
        """Select the first item when nothing is selected yet."""

        if not len(self.list):
            return False
        if self.list.selection is None or self.list.focused is None:
            self.list.select(ListSelection.single(0), focus=True)
            return False
        return True

    def _extend(self, step: int) -> None:
        selection = self.list.selection
        if selection is None:
            self._ensure_cursor()
            return
        main = selection.main
        head = main.start if main.inverted else main.end - 1
        target = head + step
        if 0 <= target < len(self.list):
            self.list.extend_to(target)

    def _shift_selection(self, direction: int) -> None:
        selection = self.list.selection
        if selection is None:
            return
        if direction == ABOVE:
            if selection.min == 0:
                return
            slot = find_insertion(HoverData(selection.min - 1, ABOVE))
        else:
            if selection.max >= len(self.list):
                return
            slot = find_insertion(HoverData(selection.max, BELOW))
        self.list.move(selection, slot)

    def _toggle_focused(self) -> None:
        index = self._focused_index()
        if index is None:
            self._ensure_cursor()
            return
        self.list.toggle(index)

    def _delete_selection(self) -> None:
        selection = self.list.selection
        if selection is not None:
            self.list.remove_from(selection)


__all__ = ["TextualListAdapter", "TextualUIHooks"]
