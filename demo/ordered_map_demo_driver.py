#!/usr/bin/env python3
"""Ordered Map Demo Driver

Runs a configurable random workload against an ordered map and samples
size and height for visualization.

Usage:
    python demo/ordered_map_demo_driver.py --strategy avl --operations 50000
"""

from __future__ import annotations

import argparse
import csv
import itertools
import logging
import math
import random
import time
from collections import defaultdict
from pathlib import Path

from ordered_map import OrderedMap, OrderedMapConfig, load_config


def height_bound(strategy: str, size: int) -> float:
    """Theoretical worst-case height for `size` keys."""
    if strategy == "avl":
        return 1.4405 * math.log2(size + 2) - 0.3277
    return 2 * math.log2(size + 1)


def run_demo(args: argparse.Namespace) -> None:
    """Run the demo workload and collect metrics."""
    if args.config:
        cfg = load_config(Path(args.config))
    else:
        cfg = OrderedMapConfig(strategy=args.strategy, check_invariants=args.check_invariants)

    rng = random.Random(args.seed)
    strategy = cfg.strategy.value
    counters: dict[str, int] = defaultdict(int)

    print(f"Starting ordered map demo: {args.operations} operations")
    print(f"Strategy: {strategy}, check invariants: {cfg.check_invariants}")
    print(f"Workload: insert={args.insert_ratio}, remove={args.remove_ratio}, key space={args.key_space_size}")
    print(f"Output: {args.out_csv}")

    m: OrderedMap[int, int] = OrderedMap(config=cfg)
    ascending = itertools.count(1)
    t_start = time.time()

    with open(args.out_csv, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["op", "strategy", "size", "height", "bound", "ops_insert", "ops_remove", "ops_find"])

        for op in range(1, args.operations + 1):
            # Ascending keys are the worst case for an unbalanced BST
            key = next(ascending) if args.ascending else rng.randrange(args.key_space_size)
            roll = rng.random()
            if roll < args.insert_ratio:
                m.insert(key, op)
                counters["insert"] += 1
            elif roll < args.insert_ratio + args.remove_ratio:
                m.remove(key)
                counters["remove"] += 1
            else:
                m.find(key)
                counters["find"] += 1

            if op % args.sample_every == 0:
                w.writerow(sample_row(m, strategy, op, counters))
                counters.clear()

    elapsed = time.time() - t_start
    print(f"Demo complete in {elapsed:.2f}s. Final size {len(m)}, height {m.height()}")
    print(f"Metrics written to {args.out_csv}")


def sample_row(m: OrderedMap, strategy: str, op: int, counters: dict) -> list:
    """Sample current metrics from the map."""
    size = len(m)
    return [
        op,
        strategy,
        size,
        m.height(),
        f"{height_bound(strategy, size):.3f}",
        counters.get("insert", 0),
        counters.get("remove", 0),
        counters.get("find", 0),
    ]


def main() -> None:
    """Parse arguments and run demo."""
    p = argparse.ArgumentParser(description="Ordered map demo driver")

    # Map configuration
    p.add_argument("--strategy", default="red_black", help="red_black or avl")
    p.add_argument("--config", default=None, help="TOML file with an [ordered_map] table")
    p.add_argument(
        "--check-invariants",
        action="store_true",
        help="Validate the tree after every mutation (slow)",
    )

    # Workload configuration
    p.add_argument("--operations", type=int, default=20_000, help="Number of operations")
    p.add_argument("--insert-ratio", type=float, default=0.6, help="Share of inserts")
    p.add_argument("--remove-ratio", type=float, default=0.2, help="Share of removes")
    p.add_argument("--key-space-size", type=int, default=100_000, help="Number of distinct keys")
    p.add_argument("--ascending", action="store_true", help="Insert strictly increasing keys")
    p.add_argument("--seed", type=int, default=0, help="Random seed")

    # Sampling configuration
    p.add_argument("--sample-every", type=int, default=500, help="Operations between samples")
    p.add_argument("--out-csv", default="/tmp/ordered_map_metrics.csv", help="Output CSV file")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.insert_ratio + args.remove_ratio > 1:
        p.error("--insert-ratio plus --remove-ratio must not exceed 1")

    run_demo(args)


if __name__ == "__main__":
    main()
