"""Wrapped list items, the item builder contract and the identity cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, Mapping, Optional


@dataclass(frozen=True, slots=True)
class ItemData:
    """What a builder produces for one piece of external data."""

    content: Any
    options: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, eq=False)
class ListItem:
    """A list entry. ``id`` is ``"<list id>-<key>"`` and never changes."""

    id: str
    key: Hashable
    content: Any
    options: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


ItemBuilder = Callable[[Any], ItemData]
KeyFunc = Callable[[Any], Hashable]


def default_key(data: Any) -> Hashable:
    """Identity of external data: an ``id`` attribute, an ``"id"`` entry, or itself."""

    ident = getattr(data, "id", None)
    if ident is not None:
        return ident
    if isinstance(data, Mapping) and "id" in data:
        return data["id"]
    return data


def default_builder(data: Any) -> ItemData:
    return ItemData(content=data)


class ItemCache:
    """Keeps wrapped items keyed by ``(list id, external key)``."""

    def __init__(self) -> None:
        self._items: Dict[tuple[str, Hashable], ListItem] = {}

    def get(self, list_id: str, key: Hashable) -> Optional[ListItem]:
        return self._items.get((list_id, key))

    def put(self, list_id: str, item: ListItem) -> None:
        self._items[(list_id, item.key)] = item

    def remember(self, list_id: str, items: Iterable[ListItem]) -> None:
        for item in items:
            self.put(list_id, item)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entry: object) -> bool:
        return entry in self._items


def build_items(
    data: Iterable[Any],
    *,
    builder: ItemBuilder,
    key: KeyFunc,
    list_id: str,
    cache: ItemCache,
    use_cache: bool,
) -> list[ListItem]:
    """Wrap ``data`` into ``ListItem``s, reusing cached wrappers when enabled.

    Fresh wrappers are not cached here; callers ``remember`` them once the
    batch is known to be valid.
    """

    items: list[ListItem] = []
    for entry in data:
        item_key = key(entry)
        if use_cache:
            cached = cache.get(list_id, item_key)
            if cached is not None:
                items.append(cached)
                continue
        built = builder(entry)
        item = ListItem(
            id=f"{list_id}-{item_key}",
            key=item_key,
            content=built.content,
            options=built.options,
        )
        items.append(item)
    return items


__all__ = [
    "ItemData",
    "ListItem",
    "ItemBuilder",
    "ItemCache",
    "KeyFunc",
    "build_items",
    "default_builder",
    "default_key",
]
