"""Invariant checkers for the balanced trees.

These walk the whole tree and are meant for tests and debugging; nothing on
the normal insert/remove path calls them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ..core.errors import InvariantViolationError
from ..core.types import Color

if TYPE_CHECKING:
    from .node_store import Node, NodeStore

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    logger.warning(f"Invariant violated: {message}")
    raise InvariantViolationError(message)


def check_structure(store: NodeStore) -> None:
    """Check BST ordering, parent links and the size counter."""
    root = store.root
    if root is not None and root.parent is not None:
        _fail("root has a parent")

    count = 0
    previous: Optional[Node] = None
    # In-order walk without the store's iterators so a broken tree cannot
    # confuse the checker.
    stack: list[Node] = []
    node = root
    while stack or node is not None:
        while node is not None:
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    _fail(f"child {child.key!r} does not point back to {node.key!r}")
            stack.append(node)
            node = node.left
        node = stack.pop()
        if previous is not None and not previous.key < node.key:
            _fail(f"keys out of order: {previous.key!r} before {node.key!r}")
        previous = node
        count += 1
        node = node.right

    if count != store.size:
        _fail(f"size counter is {store.size} but {count} nodes are reachable")


def check_red_black(store: NodeStore) -> int:
    """Validate the red-black colouring; returns the root's black-height."""
    check_structure(store)
    if store.root is None:
        return 0
    if store.root.color is not Color.BLACK:
        _fail("root is not black")

    def black_height(node: Optional[Node]) -> int:
        if node is None:
            return 0
        if node.color not in (Color.RED, Color.BLACK):
            _fail(f"node {node.key!r} has no colour")
        if node.color is Color.RED:
            for child in (node.left, node.right):
                if child is not None and child.color is Color.RED:
                    _fail(f"red node {node.key!r} has red child {child.key!r}")
        left = black_height(node.left)
        right = black_height(node.right)
        if left != right:
            _fail(f"black-height mismatch below {node.key!r}: {left} != {right}")
        return left + (1 if node.color is Color.BLACK else 0)

    return black_height(store.root)


def check_avl(store: NodeStore) -> int:
    """Validate stored heights and AVL balance; returns the tree height."""
    check_structure(store)

    def height(node: Optional[Node]) -> int:
        if node is None:
            return 0
        left = height(node.left)
        right = height(node.right)
        if abs(left - right) > 1:
            _fail(f"node {node.key!r} is out of balance: {left} vs {right}")
        actual = 1 + max(left, right)
        if node.height != actual:
            _fail(f"node {node.key!r} stores height {node.height}, actual {actual}")
        return actual

    return height(store.root)
