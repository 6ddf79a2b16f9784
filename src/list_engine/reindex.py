"""Pure sequence helpers used when the list is restructured."""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from list_engine.errors import DuplicateIdError, NotFoundError

T = TypeVar("T")


def insert_at(items: Sequence[T], item: T, index: int) -> list[T]:
    updated = list(items)
    updated.insert(index, item)
    return updated


def remove_ranges(
    items: Sequence[T], ranges: Iterable[tuple[int, int]]
) -> tuple[list[T], list[T]]:
    """Split ``items`` into (kept, removed) for sorted ``[start, end)`` spans.

    Spans must be sorted and non-overlapping: ``[(0, 1), (3, 5)]`` removes
    the items at positions 0, 3 and 4.
    """

    kept: list[T] = []
    removed: list[T] = []
    cursor = 0
    for start, end in ranges:
        kept.extend(items[cursor:start])
        removed.extend(items[start:end])
        cursor = end
    kept.extend(items[cursor:])
    return kept, removed


def propagate_move(
    src: Sequence[T],
    subset: Sequence[T],
    *,
    key: Optional[Callable[[T], Hashable]] = None,
) -> list[T]:
    """Apply the order of ``subset`` to the slots its elements hold in ``src``.

    Elements of ``src`` that are not in ``subset`` keep their positions. The
    positions occupied by subset members are refilled, in ascending order,
    with the members in ``subset``'s order::

        propagate_move("abcdefgh", "cbahe") == list("cbadhfge")
    """

    identify = key or (lambda value: value)

    positions: dict[Hashable, int] = {}
    for index, value in enumerate(src):
        ident = identify(value)
        if ident in positions:
            raise DuplicateIdError(ident)
        positions[ident] = index

    seen: set[Hashable] = set()
    slots: list[int] = []
    for value in subset:
        ident = identify(value)
        if ident in seen:
            raise DuplicateIdError(ident)
        if ident not in positions:
            raise NotFoundError(ident)
        seen.add(ident)
        slots.append(positions[ident])

    result = list(src)
    for slot, value in zip(sorted(slots), subset):
        result[slot] = value
    return result


__all__ = ["insert_at", "remove_ranges", "propagate_move"]
