"""Ordered list of uniquely identified items with a multi-range selection."""

from __future__ import annotations

from typing import (
    Any,
    ContextManager,
    Hashable,
    Iterable,
    Iterator,
    Optional,
    Sequence,
    Union,
)

from list_engine.errors import (
    BoundsError,
    DuplicateIdError,
    InvalidSelectionModeError,
    NotFoundError,
)
from list_engine.reindex import insert_at, remove_ranges
from list_engine.runtime import telemetry
from list_engine.runtime.telemetry import SpanHandle
from list_engine.selection import ListSelection, SelectionRange

from .events import Listener, ListObservers, ListSnapshot, Unsubscribe
from .focus import FocusController, InMemoryFocus
from .items import (
    ItemBuilder,
    ItemCache,
    KeyFunc,
    ListItem,
    build_items,
    default_builder,
    default_key,
)
from .options import ListOptions

MoveSource = Union[int, ListSelection]


class OrderedList:
    """Owns the item sequence and its selection and mutates them together.

    Every public mutator validates its arguments first, then swaps in the new
    items and selection in one step and notifies subscribers. A failed call
    leaves the list untouched.
    """

    def __init__(
        self,
        data: Iterable[Any] = (),
        builder: Optional[ItemBuilder] = None,
        *,
        options: Optional[ListOptions] = None,
        key: Optional[KeyFunc] = None,
        focus: Optional[FocusController] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.options = options or ListOptions()
        self.list_id = self.options.id
        self.builder = builder or default_builder
        self.key = key or default_key
        self.focus_controller: FocusController = focus or InMemoryFocus()
        self._logger_name = logger_name
        self._cache = ItemCache()
        self._observers = ListObservers()
        items = self._build(data)
        self._ids = _unique_ids(items)
        self._remember(items)
        self._items: tuple[ListItem, ...] = tuple(items)
        self._selection: Optional[ListSelection] = None

    # -- state -----------------------------------------------------------

    @property
    def items(self) -> tuple[ListItem, ...]:
        return self._items

    @property
    def selection(self) -> Optional[ListSelection]:
        return self._selection

    @property
    def selected(self) -> list[ListItem]:
        if self._selection is None:
            return []
        return self._selection.pick(self._items)

    @property
    def focused(self) -> Optional[ListItem]:
        for item in self._items:
            if self.focus_controller.is_focused(item.id):
                return item
        return None

    def snapshot(self, label: str = "") -> ListSnapshot:
        return ListSnapshot(items=self._items, selection=self._selection, label=label)

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call ``listener`` with a snapshot after every successful mutation."""

        return self._observers.subscribe(listener)

    def keys(self) -> list[Hashable]:
        return [item.key for item in self._items]

    def index_of(self, key: Hashable) -> int:
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        raise NotFoundError(key)

    def get_item(self, item_id: str) -> Optional[ListItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def get_by_key(self, key: Hashable) -> Optional[ListItem]:
        return next((item for item in self._items if item.key == key), None)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ListItem]:
        return iter(self._items)

    # -- structural edits ------------------------------------------------

    def set_data(self, data: Iterable[Any]) -> None:
        """Rebuild every item from ``data`` and clear the selection."""

        with self._span("set_data"):
            items = self._build(data)
            self._ids = _unique_ids(items)
            self._remember(items)
            self._commit("set_data", items, None)

    def add(self, data: Any) -> None:
        """Append one item at the end of the list."""

        with self._span("add"):
            item = self._build_new(data)
            self._ids.add(item.id)
            self._commit("add", [*self._items, item], self._selection)

    def insert(self, data: Any, index: int) -> None:
        """Insert ``data`` at ``index``, shifting or splitting the selection."""

        with self._span("insert", metadata={"index": index}):
            if not 0 <= index <= len(self._items):
                raise BoundsError("Index out of bounds", index=index)
            item = self._build_new(data)

            selection = self._selection
            if selection is not None:
                selection = _selection_after_insert(selection, index)

            self._ids.add(item.id)
            self._commit("insert", insert_at(self._items, item, index), selection)

    def remove(self, key: Hashable) -> None:
        """Remove the item whose external identity is ``key``."""

        with self._span("remove", metadata={"key": key}):
            index = self.index_of(key)
            self.remove_from(index)

    def remove_from(
        self, target: Union[int, ListSelection], end: Optional[int] = None
    ) -> None:
        """Remove one index, the span ``[target, end)``, or a whole selection."""

        with self._span("remove_from") as handle:
            removal = _coerce_removal(target, end)
            handle.add_metadata("removal", str(removal))
            if removal.min < 0 or removal.max > len(self._items):
                raise BoundsError(
                    "Removal points outside of the list", index=removal.max
                )

            kept, removed = remove_ranges(
                self._items, [rng.indices() for rng in removal.ranges]
            )
            selection = self._selection_after_removal(removal, len(kept))
            focused = self.focused
            refocus = (
                self.options.single
                and selection is not None
                and focused is not None
                and focused in removed
            )

            for item in removed:
                self._ids.discard(item.id)
            self._commit("remove_from", kept, selection)

            if refocus and selection is not None and selection.min < len(kept):
                self.focus_controller.focus(kept[selection.min].id)

    def move(self, source: MoveSource, to: int) -> None:
        """Lift ``source`` out of the list and drop it at slot ``to``.

        ``to`` is a slot of the list *before* the lift. Lifted items keep
        their relative order; the selection follows the items it covered.
        """

        with self._span("move", metadata={"to": to}) as handle:
            size = len(self._items)
            if not 0 <= to <= size:
                raise BoundsError("`to` is out of bounds", index=to)
            if isinstance(source, ListSelection):
                moving = source
                if moving.min < 0 or moving.max > size:
                    raise BoundsError("`from` is out of bounds", index=moving.max)
            else:
                if not 0 <= source < size:
                    raise BoundsError("`from` is out of bounds", index=source)
                moving = ListSelection.single(source)
            handle.add_metadata("source", str(moving))

            lifted = set(moving.indices())
            picked = moving.pick(self._items)
            base = [item for i, item in enumerate(self._items) if i not in lifted]
            removed_before = sum(1 for i in lifted if i < to)
            splice = min(max(to - removed_before, 0), len(base))
            items = base[:splice] + picked + base[splice:]

            if [item.id for item in items] == [item.id for item in self._items]:
                handle.add_metadata("noop", True)
                telemetry.record_event(
                    "list.move.noop",
                    level="debug",
                    data={"list": self.list_id, "to": to},
                    logger_name=self._logger_name,
                )
                return

            selection = None
            if self._selection is not None:
                previous = {item.id for item in self._selection.pick(self._items)}
                selection = ListSelection.from_indices(
                    i for i, item in enumerate(items) if item.id in previous
                )

            self._commit("move", items, selection)

    # -- selection -------------------------------------------------------

    def select(self, selection: Optional[ListSelection], *, focus: bool = False) -> None:
        """Replace the selection, or clear it with ``None``."""

        with self._span("select", metadata={"selection": str(selection)}):
            if selection is None:
                self._commit("select", self._items, None)
                return
            self._check_selection(selection)
            self._commit("select", self._items, selection)
            if focus:
                item = self._items[_head_position(selection.main)]
                if not self.focus_controller.is_focused(item.id):
                    self.focus_controller.focus(item.id)

    def toggle(self, index: int) -> None:
        """Add ``index`` to the selection, or drop it if already selected."""

        with self._span("toggle", metadata={"index": index}):
            self._check_index(index)
            current = self._selection
            if current is None:
                selection: Optional[ListSelection] = ListSelection.single(index)
            elif current.contains(index):
                selection = current.split_range(index)
            elif self.options.single:
                selection = ListSelection.single(index)
            else:
                selection = current.add_range(SelectionRange(index, index + 1))
            if selection is not None:
                self._check_selection(selection)
            self._commit("toggle", self._items, selection)

    def extend_to(self, index: int) -> None:
        """Stretch the main range so that its head lands on ``index``."""

        with self._span("extend_to", metadata={"index": index}):
            self._check_index(index)
            current = self._selection
            if current is None or self.options.single:
                selection = ListSelection.single(index)
            else:
                selection = current.replace_range(current.main.extend(index))
            self._check_selection(selection)
            self._commit("extend_to", self._items, selection)

    def up(self) -> None:
        """Select (and focus) the item above the main head."""

        if self.focused is None or self._selection is None:
            return
        index = _head_position(self._selection.main)
        if index > 0:
            self.select(ListSelection.single(index - 1), focus=True)

    def down(self) -> None:
        """Select (and focus) the item below the main head."""

        if self.focused is None or self._selection is None:
            return
        index = _head_position(self._selection.main)
        if index < len(self._items) - 1:
            self.select(ListSelection.single(index + 1), focus=True)

    # -- internals -------------------------------------------------------

    def _span(
        self, operation: str, *, metadata: Optional[dict[str, Any]] = None
    ) -> ContextManager[SpanHandle]:
        return telemetry.span(
            f"list::{operation}",
            logger_name=self._logger_name,
            component="ordered_list",
            metadata={"list": self.list_id, **(metadata or {})},
        )

    def _build(self, data: Iterable[Any]) -> list[ListItem]:
        return build_items(
            data,
            builder=self.builder,
            key=self.key,
            list_id=self.list_id,
            cache=self._cache,
            use_cache=self.options.cache,
        )

    def _build_new(self, data: Any) -> ListItem:
        item = self._build([data])[0]
        if item.id in self._ids:
            raise DuplicateIdError(item.id)
        self._remember([item])
        return item

    def _remember(self, items: Iterable[ListItem]) -> None:
        """Cache ``items`` once they passed validation."""

        if self.options.cache:
            self._cache.remember(self.list_id, items)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise BoundsError("Index out of bounds", index=index)

    def _check_selection(self, selection: ListSelection) -> None:
        if selection.min < 0 or selection.max > len(self._items):
            raise BoundsError("Selection points outside of array", index=selection.max)
        if self.options.single and selection.size() > 1:
            raise InvalidSelectionModeError(
                "Selection must be a single item or null when the selection "
                "option is configured as 'single'."
            )

    def _selection_after_removal(
        self, removal: ListSelection, remaining: int
    ) -> Optional[ListSelection]:
        current = self._selection
        if current is None:
            return None

        if removal == current:
            if self.options.single and remaining:
                if len(self._items) == removal.max:
                    return ListSelection.create([removal.main.shift(-1)])
                return current
            return None

        ranges = list(current.ranges)
        main_index = current.main_index
        for cut in removal.ranges:
            updated: list[SelectionRange] = []
            next_main = main_index
            for position, existing in enumerate(ranges):
                if cut.overlaps(existing):
                    fragments = existing.subtract(cut)
                else:
                    fragments = (existing,)
                # main_index stays in the old numbering until the cut is done
                if position == main_index:
                    next_main = len(updated) if fragments else max(0, len(updated) - 1)
                updated.extend(fragments)
            if not updated:
                return None
            ranges, main_index = updated, next_main

        shifted = [
            rng.shift(-sum(cut.length for cut in removal.ranges if cut.less(rng)))
            for rng in ranges
        ]
        return ListSelection.create(shifted, min(main_index, len(shifted) - 1))

    def _commit(
        self,
        label: str,
        items: Sequence[ListItem],
        selection: Optional[ListSelection],
    ) -> None:
        self._items = tuple(items)
        self._selection = selection
        telemetry.record_event(
            "list.changed",
            level="debug",
            data={
                "list": self.list_id,
                "label": label,
                "items": len(self._items),
                "selection": str(selection),
                "listeners": len(self._observers),
            },
            logger_name=self._logger_name,
        )
        self._observers.notify(self.snapshot(label))


def _unique_ids(items: Iterable[ListItem]) -> set[str]:
    ids: set[str] = set()
    for item in items:
        if item.id in ids:
            raise DuplicateIdError(item.id)
        ids.add(item.id)
    return ids


def _coerce_removal(
    target: Union[int, ListSelection], end: Optional[int]
) -> ListSelection:
    if isinstance(target, ListSelection):
        return target
    stop = target + 1 if end is None else end
    return ListSelection.create([SelectionRange(target, stop)])


def _selection_after_insert(selection: ListSelection, index: int) -> ListSelection:
    ranges = [rng.shift(1) if rng.start >= index else rng for rng in selection.ranges]
    for position, rng in enumerate(ranges):
        if rng.start < index < rng.end:
            ranges[position] = SelectionRange(rng.start, index)
            split = ListSelection.create(ranges, selection.main_index)
            return split.add_range(SelectionRange(index + 1, rng.end + 1), main=False)
    return ListSelection.create(ranges, selection.main_index)


def _head_position(rng: SelectionRange) -> int:
    """Index of the item under the head of ``rng``."""

    return rng.start if rng.inverted else rng.end - 1


__all__ = ["OrderedList", "MoveSource"]
