"""Directed half-open index ranges used to build list selections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from list_engine.errors import BoundsError


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Half-open interval ``[start, end)`` with a direction.

    ``anchor`` is the fixed end while extending and ``head`` the moving one.
    A non-inverted range is anchored at ``start``; an inverted range is
    anchored at ``end``. Two ranges compare equal when their anchor/head
    pairs match.
    """

    start: int
    end: int
    inverted: bool = False

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise BoundsError(
                f"start and end have to span a valid range, got ({self.start}, {self.end})",
                index=self.start,
            )

    @classmethod
    def create(cls, start: int, end: int, inverted: bool = False) -> "SelectionRange":
        return cls(start, end, inverted)

    @property
    def anchor(self) -> int:
        return self.end if self.inverted else self.start

    @property
    def head(self) -> int:
        return self.start if self.inverted else self.end

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def single(self) -> bool:
        return self.length == 1

    def extend(self, pos: int) -> "SelectionRange":
        """Move the head so that item ``pos`` becomes the last selected one.

        Crossing the anchor flips the direction. An inverted range keeps its
        anchor item (``end - 1``) selected when it flips back.
        """

        if self.inverted:
            if pos >= self.anchor:
                return SelectionRange(self.anchor - 1, pos + 1)
            return SelectionRange(pos, self.end, True)
        if pos < self.anchor:
            return SelectionRange(pos, self.anchor + 1, True)
        return SelectionRange(self.start, pos + 1)

    def shift(self, by: int) -> "SelectionRange":
        return SelectionRange(self.start + by, self.end + by, self.inverted)

    def less(self, other: "SelectionRange") -> bool:
        return self.start < other.start

    def contains(self, pos: int) -> bool:
        return self.start <= pos < self.end

    def overlaps(self, other: "SelectionRange") -> bool:
        first, second = sort_ranges((self, other))
        return second.start < first.end

    def distance_to(self, other: "SelectionRange") -> int:
        """Gap between two ranges; touching ranges are 0 apart, overlapping -1."""

        if self.overlaps(other):
            return -1
        first, second = sort_ranges((self, other))
        return second.start - first.end

    def touches(self, other: "SelectionRange") -> bool:
        return self.distance_to(other) == 0

    def subtract(self, other: "SelectionRange") -> tuple["SelectionRange", ...]:
        """Return what is left of ``self`` once ``other`` is cut out of it.

        The result holds zero, one or two ranges. ``(10, 20) - (0, 15)`` is
        ``((15, 20),)`` while ``(4, 10) - (6, 8)`` is ``((4, 6), (8, 10))``.
        An untouched range comes back as ``(self,)`` with its direction; cut
        fragments are plain forward ranges.
        """

        if other.end <= self.start or other.start >= self.end:
            return (self,)
        if other.start <= self.start and other.end >= self.end:
            return ()
        if other.start <= self.start:
            return (SelectionRange(other.end, self.end),)
        if other.end >= self.end:
            return (SelectionRange(self.start, other.start),)
        return (
            SelectionRange(self.start, other.start),
            SelectionRange(other.end, self.end),
        )

    def indices(self) -> tuple[int, int]:
        return (self.start, self.end)

    def positions(self) -> range:
        return range(self.start, self.end)

    def __repr__(self) -> str:
        return f"SelectionRange({self.anchor}/{self.head})"


def sort_ranges(ranges: Iterable[SelectionRange]) -> list[SelectionRange]:
    """Stable sort by ``start``."""

    return sorted(ranges, key=lambda r: r.start)


__all__ = ["SelectionRange", "sort_ranges"]
