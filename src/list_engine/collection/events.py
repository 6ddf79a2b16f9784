"""Change notifications published by ordered lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from list_engine.selection import ListSelection

if TYPE_CHECKING:
    from .items import ListItem

Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class ListSnapshot:
    """Items and selection as they stand after a mutation."""

    items: tuple["ListItem", ...]
    selection: Optional[ListSelection]
    label: str = ""

    @property
    def selected(self) -> list["ListItem"]:
        if self.selection is None:
            return []
        return self.selection.pick(self.items)

    @property
    def keys(self) -> list[object]:
        return [item.key for item in self.items]


Listener = Callable[[ListSnapshot], None]


class ListObservers:
    """Listener registry; ``subscribe`` hands back its own undo callable."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, snapshot: ListSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    def __len__(self) -> int:
        return len(self._listeners)


__all__ = ["ListSnapshot", "ListObservers", "Listener", "Unsubscribe"]
