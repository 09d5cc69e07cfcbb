"""Visualization utilities for capacity sweep outputs.

Chart map
---------
- 01_capacity_heatmap.png: largest placeable queen count per board size (rows)
    and tolerance (columns). Cells from budget-limited pairs are lower bounds
    and are marked with a trailing ``+``.
- 02_nodes_vs_target_T{t}.png: explored search nodes (log scale) against the
    requested queen count, one line per board size, for tolerance ``t``.
    Hollow markers are attempts that were not solved.

Functions write PNG files into ``out_dir`` and return the written paths.
"""
from __future__ import annotations

import os
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from . import settings
from .reporting import capacity_pivot
from .stats import SweepResults, TargetRecord


def _annotations(results: SweepResults) -> np.ndarray:
    pivot = capacity_pivot(results)
    labels = np.empty(pivot.shape, dtype=object)
    for i, board_size in enumerate(pivot.index):
        for j, tolerance in enumerate(pivot.columns):
            entry = results["capacity"].get((int(board_size), int(tolerance)))
            if entry is None:
                labels[i, j] = ""
            else:
                labels[i, j] = f"{entry['max_placed']}" + ("" if entry["proven"] else "+")
    return labels


def plot_capacity_heatmap(results: SweepResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    pivot = capacity_pivot(results)

    plt.figure(figsize=(1.5 * max(3, len(pivot.columns)) + 2, 0.8 * max(3, len(pivot.index)) + 2))
    sns.heatmap(
        pivot.astype(float),
        annot=_annotations(results),
        fmt="",
        cmap="viridis",
        cbar_kws={"label": "Max queens placed"},
        linewidths=0.5,
    )
    plt.xlabel("Allowed intersections (tolerance)", fontsize=12)
    plt.ylabel("N (board size)", fontsize=12)
    plt.title("Queen capacity by board size and tolerance\n('+' = search budget reached, lower bound)", fontsize=13)

    fname = os.path.join(out_dir, f"01_capacity_heatmap{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    return fname


def _records_by_tolerance(records: List[TargetRecord]) -> Dict[int, Dict[int, List[TargetRecord]]]:
    grouped: Dict[int, Dict[int, List[TargetRecord]]] = {}
    for record in records:
        grouped.setdefault(record["tolerance"], {}).setdefault(record["board_size"], []).append(record)
    return grouped


def plot_nodes_vs_target(results: SweepResults, out_dir: str) -> List[str]:
    os.makedirs(out_dir, exist_ok=True)
    written: List[str] = []

    for tolerance, per_size in sorted(_records_by_tolerance(results["records"]).items()):
        plt.figure(figsize=(10, 6))
        palette = sns.color_palette("tab10", len(per_size))
        for color, (board_size, records) in zip(palette, sorted(per_size.items())):
            records = sorted(records, key=lambda r: r["target"])
            targets = np.array([r["target"] for r in records])
            nodes = np.maximum(np.array([r["nodes"] for r in records], dtype=float), 1.0)
            solved = np.array([r["status"] == "solved" for r in records])

            plt.plot(targets, nodes, color=color, linewidth=2, label=f"N={board_size}")
            plt.scatter(targets[solved], nodes[solved], color=color, marker="o", s=40)
            plt.scatter(targets[~solved], nodes[~solved], facecolors="none", edgecolors=color, marker="o", s=60)

        plt.yscale("log")
        plt.xlabel("Requested queens (target)", fontsize=12)
        plt.ylabel("Search nodes (log scale)", fontsize=12)
        plt.title(f"Search effort vs target (tolerance={tolerance})", fontsize=13)
        plt.grid(True, alpha=0.5)
        plt.legend(fontsize=10)

        fname = os.path.join(out_dir, f"02_nodes_vs_target_T{tolerance}{settings.filename_suffix()}.png")
        plt.savefig(fname, bbox_inches="tight", dpi=150)
        plt.close()
        written.append(fname)

    return written


def plot_and_save(results: SweepResults, out_dir: str) -> Tuple[str, List[str]]:
    """Generate every sweep chart into ``out_dir``."""
    heatmap = plot_capacity_heatmap(results, out_dir)
    effort = plot_nodes_vs_target(results, out_dir)
    print(f"Charts saved to {out_dir}")
    return heatmap, effort
