#!/usr/bin/env python3
"""Ordered Map Height Plot

Reads one or more metrics CSVs from the demo driver and plots tree height
against size, together with the theoretical bound of each strategy.

Usage:
    python demo/ordered_map_demo_driver.py --strategy red_black --out-csv /tmp/rb.csv
    python demo/ordered_map_demo_driver.py --strategy avl --out-csv /tmp/avl.csv
    python demo/height_plot.py --csv /tmp/rb.csv /tmp/avl.csv --out heights.png
"""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict

import matplotlib

# Headless backend, plots are only written to files
matplotlib.use("Agg")

import matplotlib.pyplot as plt


def load_csv_data(csv_path: str) -> list[dict]:
    """Load CSV rows with numeric fields converted."""
    rows = []
    with open(csv_path) as f:
        reader = csv.DictReader(f)
        for row in reader:
            row["op"] = int(row["op"])
            row["size"] = int(row["size"])
            row["height"] = int(row["height"])
            row["bound"] = float(row["bound"])
            for key in ("ops_insert", "ops_remove", "ops_find"):
                row[key] = int(row[key])
            rows.append(row)
    return rows


def plot_static(csv_paths: list[str], output_path: str) -> None:
    """Generate height and size plots from CSV data."""
    by_strategy: dict[str, list[dict]] = defaultdict(list)
    for path in csv_paths:
        for row in load_csv_data(path):
            by_strategy[row["strategy"]].append(row)

    if not by_strategy:
        print(f"No data found in {', '.join(csv_paths)}")
        return

    fig, axes = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
    colors = plt.cm.tab10.colors

    # (1) Height vs bound
    for i, (strategy, rows) in enumerate(sorted(by_strategy.items())):
        ops = [row["op"] for row in rows]
        axes[0].plot(ops, [row["height"] for row in rows], color=colors[i], linewidth=2, label=f"{strategy} height")
        axes[0].plot(ops, [row["bound"] for row in rows], color=colors[i], linestyle="--", alpha=0.6, label=f"{strategy} bound")
    axes[0].set_ylabel("height", fontsize=11)
    axes[0].set_title("Tree Height", fontsize=12, fontweight="bold")
    axes[0].legend(loc="lower right")
    axes[0].grid(True, alpha=0.3)

    # (2) Size
    for i, (strategy, rows) in enumerate(sorted(by_strategy.items())):
        axes[1].plot([row["op"] for row in rows], [row["size"] for row in rows], color=colors[i], linewidth=2, label=strategy)
    axes[1].set_xlabel("operations", fontsize=11)
    axes[1].set_ylabel("keys", fontsize=11)
    axes[1].set_title("Map Size", fontsize=12, fontweight="bold")
    axes[1].legend(loc="lower right")
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_path, dpi=120)
    plt.close(fig)
    print(f"Plot written to {output_path}")


def main() -> None:
    """Parse arguments and plot."""
    p = argparse.ArgumentParser(description="Plot ordered map height metrics")
    p.add_argument("--csv", nargs="+", default=["/tmp/ordered_map_metrics.csv"], help="Metrics CSV file(s)")
    p.add_argument("--out", default="ordered_map_heights.png", help="Output image file")
    args = p.parse_args()

    plot_static(args.csv, args.out)


if __name__ == "__main__":
    main()
