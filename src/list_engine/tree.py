"""Hierarchical companion to the ordered list: nodes, visibility and a cursor.

Nodes start collapsed. Only children of expanded nodes are visible, and
``Tree.up``/``Tree.down`` walk the visible nodes in depth-first order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Protocol, TypeVar

from list_engine.errors import BoundsError
from list_engine.runtime import telemetry

T = TypeVar("T")


@dataclass(slots=True, eq=False)
class TreeNode(Generic[T]):
    """A node owning its children; ``parent`` is maintained by the node API."""

    id: str
    content: T
    children: List["TreeNode[T]"] = field(default_factory=list)
    collapsed: bool = True
    parent: Optional["TreeNode[T]"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def level(self) -> int:
        """Depth below the root (the root is level 0)."""

        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def add(self, node: "TreeNode[T]") -> None:
        self.insert(node, len(self.children))

    def insert(self, node: "TreeNode[T]", index: int) -> None:
        if not 0 <= index <= len(self.children):
            raise BoundsError("Index out of bounds", index=index)
        self.children.insert(index, node)
        node.parent = self

    def remove(self, node: "TreeNode[T]") -> bool:
        """Detach ``node`` from this subtree; False when it is not below here."""

        for index, child in enumerate(self.children):
            if child.id == node.id:
                del self.children[index]
                child.parent = None
                return True
        return any(child.remove(node) for child in self.children)

    def get(self, node_id: str) -> Optional["TreeNode[T]"]:
        """This node or the first descendant carrying ``node_id``."""

        if self.id == node_id:
            return self
        for child in self.children:
            found = child.get(node_id)
            if found is not None:
                return found
        return None

    def expand(self) -> None:
        self.collapsed = False

    def collapse(self) -> None:
        self.collapsed = True


def flatten_visible(node: TreeNode[T], include_root: bool = False) -> List[TreeNode[T]]:
    """Nodes a renderer would show below ``node``, depth first."""

    visible: List[TreeNode[T]] = [node] if include_root else []
    if node.collapsed:
        return visible
    for child in node.children:
        visible.append(child)
        visible.extend(flatten_visible(child))
    return visible


class SelectHandler(Protocol):
    """Host hook deciding what happens when a node is picked."""

    def __call__(self, node: TreeNode[Any]) -> None:
        ...


class Tree(Generic[T]):
    """Tree with a single selected node.

    ``select``, ``up`` and ``down`` route through ``on_select`` so a host can
    veto or decorate the change; the default just calls ``set_selection``.
    """

    def __init__(
        self,
        root: TreeNode[T],
        *,
        on_select: Optional[SelectHandler] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        self.root = root
        self.selected: Optional[TreeNode[T]] = None
        self._on_select: Callable[[TreeNode[T]], None] = on_select or self.set_selection
        self._logger_name = logger_name

    def set_selection(self, node: TreeNode[T]) -> None:
        self.selected = node

    def clear_selection(self) -> None:
        self.selected = None

    def select(self, node: TreeNode[T]) -> None:
        telemetry.record_event(
            "tree.select",
            level="debug",
            data={"node": node.id},
            logger_name=self._logger_name,
        )
        self._on_select(node)

    def visible(self) -> List[TreeNode[T]]:
        return flatten_visible(self.root, include_root=True)

    def up(self) -> None:
        self._step(-1)

    def down(self) -> None:
        self._step(1)

    def _step(self, offset: int) -> None:
        if self.selected is None:
            return
        nodes = self.visible()
        ids = [node.id for node in nodes]
        if self.selected.id not in ids:
            return
        target = ids.index(self.selected.id) + offset
        if 0 <= target < len(nodes):
            self.select(nodes[target])


__all__ = ["TreeNode", "Tree", "SelectHandler", "flatten_visible"]
