"""Selection algebra: directed ranges and normalized multi-range selections."""

from .range import SelectionRange, sort_ranges
from .selection import ListSelection

__all__ = [
    "SelectionRange",
    "ListSelection",
    "sort_ranges",
]
