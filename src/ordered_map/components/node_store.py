"""Node ownership and structural primitives shared by the balanced trees.

Each node owns its two children. The parent link is a weak reference, so it
never keeps a node alive and the tree has exactly one owner per node (the
store for the root, the parent's child slot for everyone else).
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Generic, Optional

from ..core.errors import ConcurrentModificationError
from ..core.types import Color, K, V

if TYPE_CHECKING:
    from collections.abc import Iterator


class Node(Generic[K, V]):
    """A tree node. Callers must not keep one across a removal."""

    __slots__ = ("key", "value", "color", "height", "left", "right", "_parent", "__weakref__")

    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.color: Optional[Color] = None
        self.height: int = 1
        self.left: Optional[Node[K, V]] = None
        self.right: Optional[Node[K, V]] = None
        self._parent: Optional[weakref.ref[Node[K, V]]] = None

    @property
    def parent(self) -> Optional[Node[K, V]]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional[Node[K, V]]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def __repr__(self) -> str:
        tag = self.color.name[0] if self.color is not None else self.height
        return f"<Node {tag} {self.key!r}:{self.value!r}>"


class NodeStore(Generic[K, V]):
    """Owns the root of a binary search tree and its node count.

    Invariants:
        - `size` always equals the number of nodes reachable from `root`
        - every child's `parent` points at the node holding it
        - `version` changes on every structural modification
    """

    __slots__ = ("root", "size", "version")

    def __init__(self) -> None:
        self.root: Optional[Node[K, V]] = None
        self.size: int = 0
        self.version: int = 0

    # -------------------------------
    # Ownership
    # -------------------------------
    def allocate(self, key: K, value: V) -> Node[K, V]:
        """Create a detached leaf. Colour/height are left to the caller."""
        self.size += 1
        self.version += 1
        return Node(key, value)

    def release(self, node: Node[K, V]) -> None:
        """Forget a node that has already been spliced out of the tree."""
        node.left = node.right = None
        node.parent = None
        self.size -= 1
        self.version += 1

    def clear(self) -> None:
        # Children are owned top-down, dropping the root releases everything.
        self.root = None
        self.size = 0
        self.version += 1

    def attach(self, parent: Optional[Node[K, V]], node: Node[K, V]) -> None:
        """Link a freshly allocated node below `parent` (or as the root)."""
        node.parent = parent
        if parent is None:
            self.root = node
        elif node.key < parent.key:
            parent.left = node
        else:
            parent.right = node

    def replace_child(
        self,
        parent: Optional[Node[K, V]],
        old: Optional[Node[K, V]],
        new: Optional[Node[K, V]],
    ) -> None:
        """Put `new` in the slot `old` occupies under `parent`."""
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    # -------------------------------
    # Rotations
    # -------------------------------
    def rotate_left(self, node: Node[K, V]) -> Node[K, V]:
        """Rotate `node` down to the left; returns the new subtree root."""
        pivot: Node[K, V] = node.right  # type: ignore[assignment]
        parent = node.parent

        node.right = pivot.left
        if pivot.left is not None:
            pivot.left.parent = node

        pivot.left = node
        node.parent = pivot
        self.replace_child(parent, node, pivot)
        self.version += 1
        return pivot

    def rotate_right(self, node: Node[K, V]) -> Node[K, V]:
        """Rotate `node` down to the right; returns the new subtree root."""
        pivot: Node[K, V] = node.left  # type: ignore[assignment]
        parent = node.parent

        node.left = pivot.right
        if pivot.right is not None:
            pivot.right.parent = node

        pivot.right = node
        node.parent = pivot
        self.replace_child(parent, node, pivot)
        self.version += 1
        return pivot

    # -------------------------------
    # Search / navigation
    # -------------------------------
    def find_node(self, key: K) -> Optional[Node[K, V]]:
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def find_parent(self, key: K) -> tuple[Optional[Node[K, V]], Optional[Node[K, V]]]:
        """Return `(match, last_visited)` for a BST descent on `key`."""
        parent = None
        node = self.root
        while node is not None:
            if key == node.key:
                return node, parent
            parent = node
            node = node.left if key < node.key else node.right
        return None, parent

    @staticmethod
    def minimum(node: Node[K, V]) -> Node[K, V]:
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def maximum(node: Node[K, V]) -> Node[K, V]:
        while node.right is not None:
            node = node.right
        return node

    def successor(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        """In-order successor of `node`, or None for the largest key."""
        if node.right is not None:
            return self.minimum(node.right)
        parent = node.parent
        while parent is not None and node is parent.right:
            node = parent
            parent = parent.parent
        return parent

    def predecessor(self, node: Node[K, V]) -> Optional[Node[K, V]]:
        """In-order predecessor of `node`, or None for the smallest key."""
        if node.left is not None:
            return self.maximum(node.left)
        parent = node.parent
        while parent is not None and node is parent.left:
            node = parent
            parent = parent.parent
        return parent

    def floor_node(self, key: K) -> Optional[Node[K, V]]:
        """Node with the greatest key <= `key`."""
        best = None
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            if key < node.key:
                node = node.left
            else:
                best = node
                node = node.right
        return best

    def ceiling_node(self, key: K) -> Optional[Node[K, V]]:
        """Node with the smallest key >= `key`."""
        best = None
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            if key < node.key:
                best = node
                node = node.left
            else:
                node = node.right
        return best

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty).

        Time Complexity: O(n), every node is visited once
        """
        if self.root is None:
            return 0
        tallest = 0
        stack = [(self.root, 1)]
        while stack:
            node, depth = stack.pop()
            tallest = max(tallest, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return tallest

    # -------------------------------
    # Traversals
    # -------------------------------
    def _check_version(self, expected: int) -> None:
        if self.version != expected:
            raise ConcurrentModificationError("tree changed during iteration")

    def iter_nodes(self) -> Iterator[Node[K, V]]:
        """Yield nodes in ascending key order."""
        return self.iter_range(None, None)

    def iter_nodes_reversed(self) -> Iterator[Node[K, V]]:
        """Yield nodes in descending key order."""
        version = self.version
        stack: list[Node[K, V]] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.right
            node = stack.pop()
            yield node
            self._check_version(version)
            node = node.left

    def iter_range(self, start: Optional[K], end: Optional[K]) -> Iterator[Node[K, V]]:
        """Yield nodes with `start <= key < end` in ascending order.

        Args:
            start: Start key (inclusive), or None for the beginning
            end: End key (exclusive), or None for the end
        """
        version = self.version
        stack: list[Node[K, V]] = []

        # Seed the stack with the path to the first key >= start, skipping
        # every left subtree that lies entirely below the range.
        node = self.root
        while node is not None:
            if start is not None and node.key < start:
                node = node.right
            else:
                stack.append(node)
                node = node.left

        while stack:
            node = stack.pop()
            if end is not None and not node.key < end:
                return
            yield node
            self._check_version(version)
            child = node.right
            while child is not None:
                stack.append(child)
                child = child.left
