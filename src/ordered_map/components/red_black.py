"""Red-Black balancing strategy.

Keeps the classic colour invariants after every insert and remove:
    - every node is red or black, the root is black
    - a red node never has a red child
    - every root-to-nil path crosses the same number of black nodes

Together they bound the height by 2 * log2(n + 1).
"""

from __future__ import annotations

from typing import Generic, Optional

from ..core.types import Color, K, V
from .node_store import Node, NodeStore
from .validation import check_red_black

RED = Color.RED
BLACK = Color.BLACK


def _color(node: Optional[Node]) -> Color:
    """Colour of a possibly-nil node; nil leaves are black."""
    return node.color if node is not None else BLACK  # type: ignore[return-value]


class RedBlackTree(Generic[K, V]):
    """Balanced tree core using red-black recolouring and rotations.

    Invariants:
        - The root is black
        - No red node has a red child
        - Black-height is equal on every path to a nil leaf
    """

    __slots__ = ("store",)

    def __init__(self) -> None:
        self.store: NodeStore[K, V] = NodeStore()

    def find(self, key: K) -> Optional[V]:
        node = self.store.find_node(key)
        return node.value if node is not None else None

    def height(self) -> int:
        return self.store.height()

    def validate(self) -> None:
        check_red_black(self.store)

    # -------------------------------
    # Insert
    # -------------------------------
    def insert(self, key: K, value: V) -> bool:
        """Insert or replace `key`. Returns True when a new node was created."""
        match, parent = self.store.find_parent(key)
        if match is not None:
            match.value = value
            return False

        node = self.store.allocate(key, value)
        node.color = RED
        self.store.attach(parent, node)
        self._fix_insert(node)
        return True

    def _fix_insert(self, node: Node[K, V]) -> None:
        """Walk up from a freshly inserted red node repairing red-red edges."""
        store = self.store
        while True:
            parent = node.parent
            if parent is None or parent.color is BLACK:
                break

            grandparent = parent.parent
            if grandparent is None:
                # Case 1: red parent is the root, just blacken it
                parent.color = BLACK
                break

            if parent is grandparent.left:
                uncle = grandparent.right
            else:
                uncle = grandparent.left

            if _color(uncle) is RED:
                # Case 2: push the blackness down from the grandparent
                parent.color = BLACK
                uncle.color = BLACK  # type: ignore[union-attr]
                grandparent.color = RED
                node = grandparent
                continue

            if parent is grandparent.left:
                if node is parent.right:
                    # Case 3: inner child, straighten the zig-zag
                    store.rotate_left(parent)
                    node, parent = parent, node
                # Case 4: outer child
                store.rotate_right(grandparent)
            else:
                if node is parent.left:
                    store.rotate_right(parent)
                    node, parent = parent, node
                store.rotate_left(grandparent)

            parent.color = BLACK
            grandparent.color = RED
            break

        store.root.color = BLACK  # type: ignore[union-attr]

    # -------------------------------
    # Remove
    # -------------------------------
    def remove(self, key: K) -> Optional[tuple[K, V]]:
        """Delete `key`. Returns the removed (key, value), or None if absent."""
        store = self.store
        node = store.find_node(key)
        if node is None:
            return None

        if node.left is not None and node.right is not None:
            # Two children: trade places with the in-order successor, which
            # has no left child, and remove that node instead.
            successor = store.minimum(node.right)
            node.key, successor.key = successor.key, node.key
            node.value, successor.value = successor.value, node.value
            node = successor

        removed = (node.key, node.value)
        child = node.left if node.left is not None else node.right
        parent = node.parent
        color = node.color

        store.replace_child(parent, node, child)
        store.release(node)

        if color is BLACK:
            if _color(child) is RED:
                child.color = BLACK  # type: ignore[union-attr]
            else:
                self._fix_remove(child, parent)
        return removed

    def _fix_remove(self, node: Optional[Node[K, V]], parent: Optional[Node[K, V]]) -> None:
        """Resolve a double-black deficiency sitting at `node` below `parent`.

        `node` may be nil, so its parent is tracked explicitly.
        """
        store = self.store
        while parent is not None and _color(node) is BLACK:
            if node is parent.left:
                sibling: Node[K, V] = parent.right  # type: ignore[assignment]
                if sibling.color is RED:
                    # Red sibling: rotate so the sibling becomes black
                    sibling.color = BLACK
                    parent.color = RED
                    store.rotate_left(parent)
                    sibling = parent.right  # type: ignore[assignment]

                if _color(sibling.left) is BLACK and _color(sibling.right) is BLACK:
                    # Black sibling, black nephews: move the deficiency up
                    sibling.color = RED
                    node = parent
                    parent = node.parent
                    continue

                if _color(sibling.right) is BLACK:
                    # Near nephew red: turn it into the far-nephew case
                    sibling.left.color = BLACK  # type: ignore[union-attr]
                    sibling.color = RED
                    sibling = store.rotate_right(sibling)

                # Far nephew red: absorb the deficiency
                sibling.color = parent.color
                parent.color = BLACK
                sibling.right.color = BLACK  # type: ignore[union-attr]
                store.rotate_left(parent)
                node = store.root
                break
            else:
                sibling = parent.left  # type: ignore[assignment]
                if sibling.color is RED:
                    sibling.color = BLACK
                    parent.color = RED
                    store.rotate_right(parent)
                    sibling = parent.left  # type: ignore[assignment]

                if _color(sibling.left) is BLACK and _color(sibling.right) is BLACK:
                    sibling.color = RED
                    node = parent
                    parent = node.parent
                    continue

                if _color(sibling.left) is BLACK:
                    sibling.right.color = BLACK  # type: ignore[union-attr]
                    sibling.color = RED
                    sibling = store.rotate_left(sibling)

                sibling.color = parent.color
                parent.color = BLACK
                sibling.left.color = BLACK  # type: ignore[union-attr]
                store.rotate_right(parent)
                node = store.root
                break

        if node is not None:
            node.color = BLACK
