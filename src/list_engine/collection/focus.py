"""Focus capability injected into ordered lists."""

from __future__ import annotations

from typing import Optional, Protocol


class FocusController(Protocol):
    """Host hook that moves keyboard focus between rendered items."""

    def focus(self, item_id: str) -> None:
        """Give focus to the element rendering ``item_id``."""
        ...

    def is_focused(self, item_id: str) -> bool:
        """Return True if ``item_id`` currently holds focus."""
        ...


class InMemoryFocus:
    """Headless FocusController remembering the last focused id."""

    def __init__(self, focused: Optional[str] = None) -> None:
        self.focused: Optional[str] = focused

    def focus(self, item_id: str) -> None:
        self.focused = item_id

    def is_focused(self, item_id: str) -> bool:
        return self.focused == item_id

    def blur(self) -> None:
        self.focused = None


__all__ = ["FocusController", "InMemoryFocus"]
