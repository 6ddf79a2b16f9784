"""Slot arithmetic shared with drag-and-drop and keyboard front-ends.

A slot is a gap between items: ``0`` sits before the first item and
``len(items)`` after the last one. Front-ends turn pointer positions into a
``HoverData`` and let these helpers compute where a move should land.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from list_engine.selection import ListSelection

ABOVE = -1
CENTER = 0
BELOW = 1


@dataclass(frozen=True, slots=True)
class HoverData:
    """Hovered item index plus where the pointer sits relative to it."""

    index: int
    pos: int = CENTER

    def __post_init__(self) -> None:
        if self.pos not in (ABOVE, CENTER, BELOW):
            raise ValueError(f"pos must be -1, 0 or 1, got {self.pos}")


def find_insertion(hover: HoverData) -> int:
    """Slot indicated by an insertion bar drawn around ``hover.index``."""

    return hover.index if hover.pos == ABOVE else hover.index + 1


def find_move(slot: int, selection: Optional[ListSelection]) -> int:
    """Translate a raw drop ``slot`` into the move target for ``selection``.

    Dropping inside a selected block, or right after it, snaps to the block
    start. Slots below the selection are shifted up by the number of lifted
    rows in front of them.
    """

    if selection is None:
        return slot

    for rng in selection.ranges:
        if rng.start < slot <= rng.end:
            return rng.start

    if slot <= selection.min:
        return slot

    removed_before = sum(1 for i in selection.indices() if i < slot)
    return slot - removed_before


__all__ = ["ABOVE", "CENTER", "BELOW", "HoverData", "find_insertion", "find_move"]
