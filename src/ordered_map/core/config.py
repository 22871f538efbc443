"""Configuration for the ordered map.

Defines the balancing strategy and debugging switches, plus a TOML loader.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping

import tomllib  # Python 3.11+

from .errors import ConfigError


class BalanceStrategy(Enum):
    """Self-balancing strategy used by an ordered map."""

    RED_BLACK = "red_black"
    AVL = "avl"

    @classmethod
    def parse(cls, name: str | BalanceStrategy) -> BalanceStrategy:
        """Resolve a strategy from its name ("red_black", "rb" or "avl")."""
        if isinstance(name, cls):
            return name
        normalized = str(name).strip().lower().replace("-", "_")
        if normalized in ("red_black", "rb", "redblack"):
            return cls.RED_BLACK
        if normalized == "avl":
            return cls.AVL
        raise ConfigError(f"Unknown balance strategy: {name!r}")


@dataclass
class OrderedMapConfig:
    """Configuration parameters for an ordered map.

    Attributes:
        strategy: Balancing strategy of the underlying tree
        check_invariants: Validate the tree after every mutation (debug only)
    """

    strategy: BalanceStrategy = BalanceStrategy.RED_BLACK
    check_invariants: bool = False

    def __post_init__(self) -> None:
        self.strategy = BalanceStrategy.parse(self.strategy)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OrderedMapConfig:
        unknown = set(data) - {"strategy", "check_invariants"}
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        check_invariants = data.get("check_invariants", False)
        if not isinstance(check_invariants, bool):
            raise ConfigError(f"check_invariants must be a boolean, got {check_invariants!r}")
        return cls(
            strategy=BalanceStrategy.parse(data.get("strategy", "red_black")),
            check_invariants=check_invariants,
        )


def load_config(path: Path) -> OrderedMapConfig:
    """Read the `[ordered_map]` table of a TOML file into a config."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = path.read_text(encoding="utf-8")
    data: Dict[str, Any] = tomllib.loads(raw)
    return OrderedMapConfig.from_dict(data.get("ordered_map", {}))
