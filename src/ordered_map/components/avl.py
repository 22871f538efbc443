"""AVL balancing strategy.

Every node stores the height of its subtree (a leaf has height 1, nil has 0);
the balance factor height(left) - height(right) stays within {-1, 0, 1}.
"""

from __future__ import annotations

from typing import Generic, Optional

from ..core.types import K, V
from .node_store import Node, NodeStore
from .validation import check_avl


def _height(node: Optional[Node]) -> int:
    return node.height if node is not None else 0


def _balance(node: Node) -> int:
    return _height(node.left) - _height(node.right)


def _update_height(node: Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


class AVLTree(Generic[K, V]):
    """Balanced tree core using AVL height balancing.

    Invariants:
        - |height(left) - height(right)| <= 1 at every node
        - `node.height` is exact for every node
    """

    __slots__ = ("store",)

    def __init__(self) -> None:
        self.store: NodeStore[K, V] = NodeStore()

    def find(self, key: K) -> Optional[V]:
        node = self.store.find_node(key)
        return node.value if node is not None else None

    def height(self) -> int:
        """Stored height of the root, O(1)."""
        return _height(self.store.root)

    def validate(self) -> None:
        check_avl(self.store)

    def insert(self, key: K, value: V) -> bool:
        """Insert or replace `key`. Returns True when a new node was created."""
        match, parent = self.store.find_parent(key)
        if match is not None:
            match.value = value
            return False

        node = self.store.allocate(key, value)
        node.height = 1
        self.store.attach(parent, node)
        self._rebalance_upward(parent)
        return True

    def remove(self, key: K) -> Optional[tuple[K, V]]:
        """Delete `key`. Returns the removed (key, value), or None if absent."""
        store = self.store
        node = store.find_node(key)
        if node is None:
            return None

        if node.left is not None and node.right is not None:
            successor = store.minimum(node.right)
            node.key, successor.key = successor.key, node.key
            node.value, successor.value = successor.value, node.value
            node = successor

        removed = (node.key, node.value)
        child = node.left if node.left is not None else node.right
        parent = node.parent
        store.replace_child(parent, node, child)
        store.release(node)
        self._rebalance_upward(parent)
        return removed

    # -------------------------------
    # Rebalancing
    # -------------------------------
    def _rotate_left(self, node: Node[K, V]) -> Node[K, V]:
        pivot = self.store.rotate_left(node)
        _update_height(node)
        _update_height(pivot)
        return pivot

    def _rotate_right(self, node: Node[K, V]) -> Node[K, V]:
        pivot = self.store.rotate_right(node)
        _update_height(node)
        _update_height(pivot)
        return pivot

    def _rebalance_upward(self, node: Optional[Node[K, V]]) -> None:
        """Recompute heights from `node` to the root, rotating where needed."""
        while node is not None:
            _update_height(node)
            balance = _balance(node)

            if balance > 1:
                # Left-heavy: LL needs one rotation, LR needs two
                if _balance(node.left) < 0:  # type: ignore[arg-type]
                    self._rotate_left(node.left)  # type: ignore[arg-type]
                node = self._rotate_right(node)
            elif balance < -1:
                # Right-heavy: RR needs one rotation, RL needs two
                if _balance(node.right) > 0:  # type: ignore[arg-type]
                    self._rotate_right(node.right)  # type: ignore[arg-type]
                node = self._rotate_left(node)

            node = node.parent
