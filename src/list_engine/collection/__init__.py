"""Ordered list engine: items, options, focus and change notifications."""

from .events import ListObservers, ListSnapshot
from .focus import FocusController, InMemoryFocus
from .items import ItemCache, ItemData, ListItem, build_items, default_key
from .options import ListOptions, merge_options
from .ordered_list import MoveSource, OrderedList

__all__ = [
    "OrderedList",
    "MoveSource",
    "ListOptions",
    "merge_options",
    "ListItem",
    "ItemData",
    "ItemCache",
    "build_items",
    "default_key",
    "FocusController",
    "InMemoryFocus",
    "ListSnapshot",
    "ListObservers",
]
