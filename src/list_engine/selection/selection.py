"""Multi-range list selections with a designated main range."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, TypeVar

from list_engine.errors import BoundsError

from .range import SelectionRange

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ListSelection:
    """Sorted, non-overlapping ranges plus the index of the main range.

    Instances are only built through the factory classmethods, which keep the
    ranges normalized. Every operation returns a new selection; ``None``
    stands for "nothing selected". Equality compares the ranges only.
    """

    ranges: tuple[SelectionRange, ...]
    main_index: int = field(default=0, compare=False)

    # -- factories -------------------------------------------------------

    @classmethod
    def create(
        cls, ranges: Iterable[SelectionRange], main_index: Optional[int] = None
    ) -> "ListSelection":
        items = list(ranges)
        if not items:
            raise ValueError("Ranges are empty")
        if main_index is None:
            main_index = len(items) - 1
        if not 0 <= main_index < len(items):
            raise BoundsError(
                f"main index {main_index} does not point at one of {len(items)} ranges",
                index=main_index,
            )

        pos = 0
        for rng in items:
            if pos >= rng.start:
                return cls.normalize(items, main_index)
            pos = rng.end

        return cls(tuple(items), main_index)

    @classmethod
    def single(cls, index: int) -> "ListSelection":
        return cls((SelectionRange(index, index + 1),), 0)

    @staticmethod
    def range(anchor: int, head: int) -> SelectionRange:
        """Build a range running from ``anchor`` to ``head``."""

        inverted = head < anchor
        if inverted:
            return SelectionRange(head, anchor, True)
        return SelectionRange(anchor, head)

    @classmethod
    def from_indices(
        cls, indices: Iterable[int], main_index: int = 0
    ) -> Optional["ListSelection"]:
        """Build a selection covering ``indices``, merging consecutive runs."""

        ordered = sorted(set(indices))
        if not ordered:
            return None

        ranges: list[SelectionRange] = []
        run_start = ordered[0]
        for prev, current in zip(ordered, ordered[1:]):
            if current != prev + 1:
                ranges.append(SelectionRange(run_start, prev + 1))
                run_start = current
        ranges.append(SelectionRange(run_start, ordered[-1] + 1))
        return cls.create(ranges, min(main_index, len(ranges) - 1))

    @classmethod
    def normalize(
        cls, ranges: Sequence[SelectionRange], main_index: int = 0
    ) -> "ListSelection":
        """Sort ranges and merge the ones that overlap or touch.

        A true overlap with the main range resolves to the main range's
        bounds; touching ranges are unioned. The merged range always takes
        the direction of the main range.
        """

        order = sorted(range(len(ranges)), key=lambda i: ranges[i].start)
        merged = [ranges[i] for i in order]
        main_index = order.index(main_index)

        i = 1
        while i < len(merged):
            current, prev, main = merged[i], merged[i - 1], merged[main_index]
            if current.start <= prev.end:
                keep_main = main_index in (i, i - 1) and current.start < prev.end
                start = main.start if keep_main else prev.start
                end = main.end if keep_main else max(current.end, prev.end)
                if i <= main_index:
                    main_index -= 1
                i -= 1
                merged[i : i + 2] = [SelectionRange(start, end, main.inverted)]
            i += 1

        return cls(tuple(merged), main_index)

    # -- transformations -------------------------------------------------

    def add_range(self, rng: SelectionRange, main: bool = True) -> "ListSelection":
        """Extend this selection with an extra range."""

        return ListSelection.create(
            [rng, *self.ranges], 0 if main else self.main_index + 1
        )

    def replace_range(
        self, rng: SelectionRange, which: Optional[int] = None
    ) -> "ListSelection":
        """Swap the range at ``which`` (main by default) and renormalize."""

        if which is None:
            which = self.main_index
        if not 0 <= which < len(self.ranges):
            raise BoundsError("range at specified index does not exist", index=which)
        ranges = list(self.ranges)
        ranges[which] = rng
        return ListSelection.create(ranges, self.main_index)

    def split_range(self, index: int) -> Optional["ListSelection"]:
        """Drop position ``index`` from the selection.

        Singleton ranges disappear (and the nearest remaining range becomes
        main), interior positions split a range in two, edge positions
        shorten it. Returns ``None`` once nothing is left.
        """

        range_index = self._find_range(index)
        if range_index is None:
            raise BoundsError(f"position {index} is not selected", index=index)
        rng = self.ranges[range_index]

        if rng.single:
            if len(self.ranges) == 1:
                return None
            before = self.ranges[range_index - 1] if range_index > 0 else None
            after = (
                self.ranges[range_index + 1]
                if range_index + 1 < len(self.ranges)
                else None
            )
            if before is not None and (
                after is None or before.distance_to(rng) < after.distance_to(rng)
            ):
                main_index = range_index - 1
            else:
                main_index = range_index
            ranges = self.ranges[:range_index] + self.ranges[range_index + 1 :]
            return ListSelection.create(ranges, main_index)

        if rng.start < index < rng.end - 1:
            left = SelectionRange(rng.start, index)
            right = SelectionRange(index + 1, rng.end)
            ranges = list(self.ranges)
            ranges[range_index : range_index + 1] = [left, right]
            main_index = self.main_index
            if main_index > range_index:
                main_index += 1
            return ListSelection.create(ranges, main_index)

        if index == rng.start:
            shortened = SelectionRange(rng.start + 1, rng.end, rng.inverted)
        else:
            shortened = SelectionRange(rng.start, rng.end - 1, rng.inverted)
        return self.replace_range(shortened, range_index)

    # -- queries ---------------------------------------------------------

    def contains(self, index: int) -> bool:
        return self._find_range(index) is not None

    def pick(self, items: Sequence[T]) -> list[T]:
        """Return the selected items, in range order."""

        if self.max > len(items):
            raise BoundsError(
                f"selection ends at {self.max} but the sequence holds {len(items)} items",
                index=self.max,
            )
        picked: list[T] = []
        for rng in self.ranges:
            picked.extend(items[rng.start : rng.end])
        return picked

    def indices(self) -> list[int]:
        return [i for rng in self.ranges for i in rng.positions()]

    def size(self) -> int:
        return sum(rng.length for rng in self.ranges)

    def is_single(self) -> bool:
        return len(self.ranges) == 1 and self.ranges[0].single

    def is_multiple(self) -> bool:
        return self.size() > 1

    @property
    def main(self) -> SelectionRange:
        return self.ranges[self.main_index]

    @property
    def min(self) -> int:
        return self.ranges[0].start

    @property
    def max(self) -> int:
        return self.ranges[-1].end

    def _find_range(self, index: int) -> Optional[int]:
        for i, rng in enumerate(self.ranges):
            if rng.contains(index):
                return i
        return None

    def __str__(self) -> str:
        return ",".join(f"{r.anchor}/{r.head}" for r in self.ranges)


__all__ = ["ListSelection"]
