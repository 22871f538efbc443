"""Ordered map facade - main public API.

Delegates storage and balancing to a Red-Black or AVL core chosen at
construction time.
"""

from __future__ import annotations

import logging
from collections.abc import ItemsView, Iterable, Iterator, MutableMapping, ValuesView
from dataclasses import replace
from typing import Any, Generic, Optional

from .config import BalanceStrategy, OrderedMapConfig
from .errors import EmptyMapError, KeyNotFoundError
from .types import K, V
from ..components.avl import AVLTree
from ..components.node_store import NodeStore
from ..components.red_black import RedBlackTree
from ..interfaces.tree import BalancedTree

logger = logging.getLogger(__name__)

_TREES: dict[BalanceStrategy, type] = {
    BalanceStrategy.RED_BLACK: RedBlackTree,
    BalanceStrategy.AVL: AVLTree,
}

_MISSING: Any = object()


def create_tree(strategy: BalanceStrategy | str) -> BalancedTree:
    """Build an empty tree core for the given strategy."""
    strategy = BalanceStrategy.parse(strategy)
    logger.debug(f"Creating {strategy.value} tree core")
    return _TREES[strategy]()


class RangeView(Generic[K, V]):
    """Lazy view of the (key, value) pairs with `start <= key < end`.

    Every iteration restarts from the tree, so the view can be reused after
    the map changes. A single iterator, however, fails if the map is
    modified while it is suspended.
    """

    __slots__ = ("_store", "start", "end")

    def __init__(self, store: NodeStore[K, V], start: Optional[K], end: Optional[K]) -> None:
        self._store = store
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for node in self._store.iter_range(self.start, self.end):
            yield (node.key, node.value)

    def keys(self) -> Iterator[K]:
        for node in self._store.iter_range(self.start, self.end):
            yield node.key

    def __repr__(self) -> str:
        return f"RangeView({self.start!r}, {self.end!r})"


class _ItemsView(ItemsView):
    # Walk the nodes directly instead of one lookup per key
    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        for node in self._mapping._tree.store.iter_nodes():
            yield (node.key, node.value)


class _ValuesView(ValuesView):
    def __iter__(self) -> Iterator[Any]:
        for node in self._mapping._tree.store.iter_nodes():
            yield node.value


class OrderedMap(MutableMapping[K, V], Generic[K, V]):
    """A mutable mapping that keeps its keys sorted.

    Args:
        items: Optional mapping or iterable of (key, value) pairs to load
        strategy: Balancing strategy name or member, overrides `config`
        config: Full configuration; defaults to a Red-Black tree

    Public API:
        - insert(key, value) / remove(key) / find(key): core operations
        - contains_key(key), is_empty(), len(m)
        - min(), max(), successor(key), predecessor(key), floor(key), ceiling(key)
        - range(lo, hi): lazy, restartable view of a key interval
        - the full MutableMapping protocol, iterating in ascending key order

    Invariants:
        - Iteration yields keys in strictly increasing order
        - len() equals the number of reachable keys
        - Height stays logarithmic in len() for either strategy
    """

    def __init__(
        self,
        items: Optional[Iterable[tuple[K, V]] | MutableMapping[K, V]] = None,
        *,
        strategy: Optional[BalanceStrategy | str] = None,
        config: Optional[OrderedMapConfig] = None,
    ) -> None:
        config = config if config is not None else OrderedMapConfig()
        if strategy is not None:
            config = replace(config, strategy=BalanceStrategy.parse(strategy))
        self.config = config
        self._tree: BalancedTree[K, V] = create_tree(config.strategy)

        if items is not None:
            self.update(items)

        logger.debug(f"Initialized {config.strategy.value} ordered map with {len(self)} keys")

    @property
    def strategy(self) -> BalanceStrategy:
        return self.config.strategy

    def _after_mutation(self) -> None:
        if self.config.check_invariants:
            self._tree.validate()

    # -------------------------------
    # Core operations
    # -------------------------------
    def insert(self, key: K, value: V) -> bool:
        """Insert or replace. Returns True if `key` was not present before."""
        created = self._tree.insert(key, value)
        self._after_mutation()
        return created

    def remove(self, key: K) -> bool:
        """Remove `key`. Returns False if it was not present."""
        removed = self._tree.remove(key)
        self._after_mutation()
        return removed is not None

    def find(self, key: K) -> Optional[V]:
        """Return the value for `key`, or None if absent.

        A stored None looks the same as a miss; use `contains_key(key)` or
        `get(key, default)` when None is a legitimate value.
        """
        return self._tree.find(key)

    def contains_key(self, key: K) -> bool:
        return self._tree.store.find_node(key) is not None

    def is_empty(self) -> bool:
        return self._tree.store.size == 0

    # -------------------------------
    # Mapping protocol
    # -------------------------------
    def __len__(self) -> int:
        return self._tree.store.size

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        node = self._tree.store.find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node.value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def __iter__(self) -> Iterator[K]:
        """Yield keys in ascending order."""
        for node in self._tree.store.iter_nodes():
            yield node.key

    def __reversed__(self) -> Iterator[K]:
        for node in self._tree.store.iter_nodes_reversed():
            yield node.key

    def items(self) -> ItemsView[K, V]:
        return _ItemsView(self)

    def values(self) -> ValuesView[V]:
        return _ValuesView(self)

    def pop(self, key: K, default: Any = _MISSING) -> V:
        removed = self._tree.remove(key)
        if removed is None:
            if default is _MISSING:
                raise KeyNotFoundError(key)
            return default
        self._after_mutation()
        return removed[1]

    def popitem(self) -> tuple[K, V]:
        """Remove and return the largest (key, value) pair."""
        if self.is_empty():
            raise KeyNotFoundError("popitem(): ordered map is empty")
        return self.pop_max()

    def clear(self) -> None:
        logger.debug(f"Clearing ordered map with {len(self)} keys")
        self._tree.store.clear()

    def copy(self) -> OrderedMap[K, V]:
        return OrderedMap(self.items(), config=replace(self.config))

    def __eq__(self, other: object) -> bool:
        # Keys only need an order, so compare in key order instead of hashing
        if isinstance(other, OrderedMap):
            if len(self) != len(other):
                return False
            return all(a == b for a, b in zip(self.items(), other.items()))
        return super().__eq__(other)

    # -------------------------------
    # Order queries
    # -------------------------------
    def min_item(self) -> tuple[K, V]:
        root = self._tree.store.root
        if root is None:
            raise EmptyMapError("min_item(): ordered map is empty")
        node = NodeStore.minimum(root)
        return (node.key, node.value)

    def max_item(self) -> tuple[K, V]:
        root = self._tree.store.root
        if root is None:
            raise EmptyMapError("max_item(): ordered map is empty")
        node = NodeStore.maximum(root)
        return (node.key, node.value)

    def min(self) -> K:
        """Smallest key; raises EmptyMapError on an empty map."""
        return self.min_item()[0]

    def max(self) -> K:
        """Largest key; raises EmptyMapError on an empty map."""
        return self.max_item()[0]

    def pop_min(self) -> tuple[K, V]:
        item = self.min_item()
        self.remove(item[0])
        return item

    def pop_max(self) -> tuple[K, V]:
        item = self.max_item()
        self.remove(item[0])
        return item

    def successor(self, key: K) -> K:
        """Smallest key greater than `key`; KeyNotFoundError if none."""
        store = self._tree.store
        node = store.find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        following = store.successor(node)
        if following is None:
            raise KeyNotFoundError(f"No successor for {key!r}")
        return following.key

    def predecessor(self, key: K) -> K:
        """Greatest key smaller than `key`; KeyNotFoundError if none."""
        store = self._tree.store
        node = store.find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        preceding = store.predecessor(node)
        if preceding is None:
            raise KeyNotFoundError(f"No predecessor for {key!r}")
        return preceding.key

    def floor(self, key: K) -> Optional[K]:
        """Greatest stored key <= `key`, or None."""
        node = self._tree.store.floor_node(key)
        return node.key if node is not None else None

    def ceiling(self, key: K) -> Optional[K]:
        """Smallest stored key >= `key`, or None."""
        node = self._tree.store.ceiling_node(key)
        return node.key if node is not None else None

    def range(self, lo: Optional[K] = None, hi: Optional[K] = None) -> RangeView[K, V]:
        """Lazy view of pairs with `lo <= key < hi`; None leaves a side open."""
        return RangeView(self._tree.store, lo, hi)

    # -------------------------------
    # Diagnostics
    # -------------------------------
    def height(self) -> int:
        return self._tree.height()

    def validate(self) -> None:
        """Raise InvariantViolationError if the underlying tree is malformed."""
        self._tree.validate()

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"OrderedMap({{{items}}}, strategy={self.strategy.value!r})"
