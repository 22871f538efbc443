"""Exception hierarchy for the ordered map.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class OrderedMapError(Exception):
    """Base exception for all ordered map errors."""
    pass


class KeyNotFoundError(OrderedMapError, KeyError):
    """Raised when a required key (or its neighbour) is absent."""
    pass


class EmptyMapError(OrderedMapError, ValueError):
    """Raised when min/max style queries are made on an empty map."""
    pass


class InvariantViolationError(OrderedMapError, AssertionError):
    """Raised by the invariant checkers when a tree is structurally broken."""
    pass


class ConcurrentModificationError(OrderedMapError, RuntimeError):
    """Raised when a tree is mutated while an iterator over it is suspended."""
    pass


class ConfigError(OrderedMapError, ValueError):
    """Raised when a configuration value cannot be understood."""
    pass
