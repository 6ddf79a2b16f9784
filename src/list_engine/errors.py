"""Error taxonomy shared by the selection algebra and the ordered list."""

from __future__ import annotations

from typing import Hashable, Optional


class ListError(RuntimeError):
    """Base class for caller errors raised by the list engine."""


class BoundsError(ListError, IndexError):
    """Raised when an index, range or selection falls outside valid bounds."""

    def __init__(self, message: str, *, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class DuplicateIdError(ListError):
    """Raised when an item's identity is already present in the list."""

    def __init__(self, item_id: Hashable) -> None:
        super().__init__(
            f"Duplicate identifier detected: '{item_id}'. Each item must have a unique ID."
        )
        self.item_id = item_id


class InvalidSelectionModeError(ListError):
    """Raised when a multi-item selection reaches a single-selection list."""


class NotFoundError(ListError, LookupError):
    """Raised when an identity cannot be resolved to an item."""

    def __init__(self, key: Hashable) -> None:
        super().__init__(f"Item '{key}' not found")
        self.key = key


class InvariantViolation(AssertionError):
    """Internal selection algebra failure. Indicates a bug, not a caller error."""


__all__ = [
    "ListError",
    "BoundsError",
    "DuplicateIdError",
    "InvalidSelectionModeError",
    "NotFoundError",
    "InvariantViolation",
]
