from dataclasses import FrozenInstanceError
from types import SimpleNamespace

import pytest

from list_engine.collection import (
    ItemCache,
    ItemData,
    ListOptions,
    build_items,
    default_key,
    merge_options,
)
from list_engine.collection.options import SELECTION_MODES


def test_default_key_prefers_id_attribute_then_mapping_entry() -> None:
    assert default_key(SimpleNamespace(id=7)) == 7
    assert default_key({"id": "x", "name": "y"}) == "x"
    assert default_key("plain") == "plain"


def test_build_items_prefixes_ids_and_reuses_cache() -> None:
    cache = ItemCache()
    calls = []

    def builder(data):
        calls.append(data)
        return ItemData(content=data.upper(), options={"draggable": True})

    first = build_items(
        ["a", "b"], builder=builder, key=default_key, list_id="l", cache=cache, use_cache=True
    )
    assert len(cache) == 0
    cache.remember("l", first)
    second = build_items(
        ["b"], builder=builder, key=default_key, list_id="l", cache=cache, use_cache=True
    )

    assert [item.id for item in first] == ["l-a", "l-b"]
    assert first[0].content == "A"
    assert first[0].options["draggable"] is True
    assert second[0] is first[1]
    assert calls == ["a", "b"]
    assert len(cache) == 2
    assert ("l", "a") in cache


def test_build_items_without_cache_always_rebuilds() -> None:
    cache = ItemCache()
    kwargs = dict(
        builder=lambda data: ItemData(content=data),
        key=default_key,
        list_id="l",
        cache=cache,
        use_cache=False,
    )

    first = build_items(["a"], **kwargs)
    second = build_items(["a"], **kwargs)

    assert first[0] is not second[0]
    assert len(cache) == 0


def test_item_options_are_read_only() -> None:
    (item,) = build_items(
        ["a"],
        builder=lambda data: ItemData(content=data, options={"k": 1}),
        key=default_key,
        list_id="l",
        cache=ItemCache(),
        use_cache=False,
    )

    with pytest.raises(TypeError):
        item.options["k"] = 2  # type: ignore[index]
    with pytest.raises(FrozenInstanceError):
        item.content = "b"  # type: ignore[misc]


def test_list_options_defaults() -> None:
    options = ListOptions()

    assert options.id.startswith("list-")
    assert options.cache is True
    assert options.selection == "multi"
    assert options.single is False
    assert SELECTION_MODES == ("multi", "single")


def test_list_options_validation() -> None:
    with pytest.raises(ValueError):
        ListOptions(selection="range")
    with pytest.raises(ValueError):
        ListOptions(id="")


def test_merge_options_overrides_fields() -> None:
    base = ListOptions(id="base")
    merged = merge_options(base, selection="single", cache=False)

    assert merged.id == "base"
    assert merged.single is True
    assert merged.cache is False
    assert base.selection == "multi"
