"""Common type definitions for the ordered map.

Defines the key contract and the generic parameters shared by all components.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, TypeVar


# NOTE: keys must form a total order. The trees only ever call `<` and `==`,
# an inconsistent comparator is a caller bug and is not detected here.
class Comparable(Protocol):
    def __lt__(self, other: Any) -> bool: ...
    def __le__(self, other: Any) -> bool: ...
    def __gt__(self, other: Any) -> bool: ...
    def __ge__(self, other: Any) -> bool: ...


K = TypeVar("K", bound=Comparable)
V = TypeVar("V")


class Color(Enum):
    """Red-Black node colour."""

    RED = "red"
    BLACK = "black"
