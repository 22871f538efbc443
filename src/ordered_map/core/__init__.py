"""Ordered map core package."""

from .ordered_map import OrderedMap, RangeView, create_tree

__all__ = ["OrderedMap", "RangeView", "create_tree"]
