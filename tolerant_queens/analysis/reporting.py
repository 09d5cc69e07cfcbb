"""CSV export utilities for capacity sweeps (aggregates and raw records).

These helpers materialize a per-pair capacity summary, the full per-target
record list, and a size x tolerance pivot for spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os

import pandas as pd

from . import settings
from .stats import SweepResults, summarize_by_status


def capacity_frame(results: SweepResults) -> pd.DataFrame:
    """Per-pair capacity entries as a DataFrame sorted by size then tolerance."""
    rows = [results["capacity"][key] for key in sorted(results["capacity"])]
    columns = ["board_size", "tolerance", "max_placed", "proven", "attempts", "total_nodes", "total_time"]
    return pd.DataFrame(rows, columns=columns)


def capacity_pivot(results: SweepResults) -> pd.DataFrame:
    """Capacity as a board_size (rows) x tolerance (columns) table."""
    frame = capacity_frame(results)
    return frame.pivot(index="board_size", columns="tolerance", values="max_placed")


def save_capacity_to_csv(results: SweepResults, out_dir: str) -> str:
    """Write one line per ``(board_size, tolerance)`` pair. Returns the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"capacity{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "board_size",
            "tolerance",
            "max_placed",
            "proven",
            "attempts",
            "total_nodes",
            "total_time_seconds",
        ])
        for key in sorted(results["capacity"]):
            entry = results["capacity"][key]
            writer.writerow([
                entry["board_size"],
                entry["tolerance"],
                entry["max_placed"],
                entry["proven"],
                entry["attempts"],
                entry["total_nodes"],
                f"{entry['total_time']:.6f}",
            ])

    print(f"Capacity summary saved to {filename}")
    return filename


def save_raw_records_to_csv(results: SweepResults, out_dir: str) -> str:
    """Write every individual solve attempt of the sweep. Returns the path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_targets{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["board_size", "tolerance", "target", "status", "nodes", "time_seconds"])
        for record in results["records"]:
            writer.writerow([
                record["board_size"],
                record["tolerance"],
                record["target"],
                record["status"],
                record["nodes"],
                f"{record['time']:.6f}",
            ])

    print(f"Raw target records saved to {filename}")
    return filename


def save_capacity_pivot(results: SweepResults, out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"capacity_pivot{settings.filename_suffix()}.csv")
    capacity_pivot(results).to_csv(filename)
    print(f"Capacity pivot saved to {filename}")
    return filename


def save_status_summary(results: SweepResults, out_dir: str) -> str:
    """Write node/time statistics per search status (solved, unsatisfiable, ...)."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"status_summary{settings.filename_suffix()}.csv")
    summary = summarize_by_status(results["records"])

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["status", "metric", "count", "mean", "median", "std", "min", "max"])
        for status in sorted(summary):
            for metric, stats in summary[status].items():
                writer.writerow([
                    status,
                    metric,
                    stats.get("count"),
                    stats.get("mean"),
                    stats.get("median"),
                    stats.get("std"),
                    stats.get("min"),
                    stats.get("max"),
                ])

    print(f"Status summary saved to {filename}")
    return filename
