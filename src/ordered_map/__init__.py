"""Ordered Map - a sorted mapping on Red-Black or AVL trees in Python."""

from .core.config import BalanceStrategy, OrderedMapConfig, load_config
from .core.errors import (
    OrderedMapError,
    KeyNotFoundError,
    EmptyMapError,
    InvariantViolationError,
    ConcurrentModificationError,
    ConfigError,
)
from .core.ordered_map import OrderedMap, RangeView, create_tree
from .core.types import Color, Comparable

__all__ = [
    "BalanceStrategy",
    "OrderedMapConfig",
    "load_config",
    "OrderedMapError",
    "KeyNotFoundError",
    "EmptyMapError",
    "InvariantViolationError",
    "ConcurrentModificationError",
    "ConfigError",
    "OrderedMap",
    "RangeView",
    "create_tree",
    "Color",
    "Comparable",
]
