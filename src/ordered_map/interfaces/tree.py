"""Protocol definition for a balanced tree core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from ..core.types import K, V

if TYPE_CHECKING:
    from ..components.node_store import NodeStore


class BalancedTree(Protocol[K, V]):
    """A balancing strategy the ordered map can delegate to."""

    store: NodeStore[K, V]

    def insert(self, key: K, value: V) -> bool:
        """Insert or replace; True when the key was not present before."""
        ...

    def remove(self, key: K) -> Optional[tuple[K, V]]:
        """Delete key; return the removed (key, value) or None if absent."""
        ...

    def find(self, key: K) -> Optional[V]:
        """Return the value for key or None if not present."""
        ...

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        ...

    def validate(self) -> None:
        """Raise InvariantViolationError if the tree is malformed."""
        ...
