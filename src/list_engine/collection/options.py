"""Configuration for ordered lists."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace

SELECTION_MODES = ("multi", "single")


def _default_list_id() -> str:
    return f"list-{round(random.random() * 100000)}"


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Per-list settings.

    ``id`` prefixes every item id, ``cache`` reuses wrapped items across
    rebuilds and ``selection`` restricts the list to one selected item when
    set to ``"single"``.
    """

    id: str = field(default_factory=_default_list_id)
    cache: bool = True
    selection: str = "multi"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("list id cannot be empty")
        if self.selection not in SELECTION_MODES:
            raise ValueError(
                f"selection must be one of {SELECTION_MODES}, got '{self.selection}'"
            )

    @property
    def single(self) -> bool:
        return self.selection == "single"


def merge_options(defaults: ListOptions, **overrides: object) -> ListOptions:
    return replace(defaults, **overrides)


__all__ = ["ListOptions", "SELECTION_MODES", "merge_options"]
