"""Typed result shapes and statistics helpers for capacity sweeps.

Defines ``TypedDict`` structures for sweep outputs and provides utilities
to compute aggregate statistics over per-target search records.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, Tuple, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class TargetRecord(TypedDict):
    board_size: int
    tolerance: int
    target: int
    status: str
    nodes: int
    time: float


class CapacityEntry(TypedDict):
    board_size: int
    tolerance: int
    max_placed: int
    proven: bool
    attempts: int
    total_nodes: int
    total_time: float


class SweepResults(TypedDict):
    capacity: Dict[Tuple[int, int], CapacityEntry]
    records: List[TargetRecord]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1 to avoid
        division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75) and range. When ``values`` is empty, all numeric
    fields are ``None`` and ``count`` is 0 to keep CSV generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    min_val = min(values)
    max_val = max(values)
    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": max_val - min_val,
    }


def summarize_by_status(records: List[TargetRecord]) -> Dict[str, Dict[str, StatsSummary]]:
    """Group records by search status and summarize their nodes and times.

    Returns ``{status: {"nodes": StatsSummary, "time": StatsSummary}}`` with
    only the statuses that occur in ``records``.
    """
    grouped: Dict[str, List[TargetRecord]] = {}
    for record in records:
        grouped.setdefault(record["status"], []).append(record)

    return {
        status: {
            "nodes": compute_detailed_statistics([float(r["nodes"]) for r in group]),
            "time": compute_detailed_statistics([r["time"] for r in group]),
        }
        for status, group in grouped.items()
    }
