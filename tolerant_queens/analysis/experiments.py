"""Capacity sweep runners (sequential and parallel).

For each ``(board_size, tolerance)`` pair the sweep asks the budgeted solver
for 1, 2, 3, ... queens on an empty board and stops at the first target that
is not solved. The last solved target is the pair's capacity; it is proven
maximal when the stop was an exhaustive ``UNSATISFIABLE`` answer (not a
budget cut-off) or when it reaches the row bound ``board_size * (tolerance + 1)``.

Outputs are structured dictionaries suitable for CSV export and plotting.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .stats import CapacityEntry, ProgressPrinter, SweepResults, TargetRecord
from tolerant_queens.backtracking import SearchStatus, solve_with_budget
from tolerant_queens.validation import is_valid


def default_max_target(board_size: int, tolerance: int) -> int:
    """Upper bound from rows alone: each row holds at most ``tolerance + 1`` queens."""
    return board_size * (tolerance + 1)


# Reusable worker ------------------------------------------------------------

def run_capacity_for_pair(
    params: Tuple[int, int, Optional[int], Optional[float], Optional[int]]
) -> Tuple[CapacityEntry, List[TargetRecord]]:
    """Worker: climb targets for one pair (top-level so executors can pickle it)."""
    board_size, tolerance, max_target, time_limit, node_limit = params
    limit = default_max_target(board_size, tolerance) if max_target is None else max_target

    records: List[TargetRecord] = []
    max_placed = 0
    proven = False
    for target in range(1, limit + 1):
        outcome = solve_with_budget(
            board_size, (), target, tolerance, time_limit=time_limit, node_limit=node_limit
        )
        if outcome.solution is not None and not is_valid(outcome.solution, tolerance):
            raise AssertionError(
                f"Invalid solution for N={board_size}, tolerance={tolerance}: {outcome.solution}"
            )
        records.append({
            "board_size": board_size,
            "tolerance": tolerance,
            "target": target,
            "status": outcome.status.value,
            "nodes": outcome.nodes,
            "time": outcome.elapsed,
        })
        if outcome.status is not SearchStatus.SOLVED:
            proven = outcome.status is SearchStatus.UNSATISFIABLE
            break
        max_placed = target

    # No row can hold more than tolerance + 1 queens, so reaching that bound is a proof.
    if max_placed == default_max_target(board_size, tolerance):
        proven = True

    entry: CapacityEntry = {
        "board_size": board_size,
        "tolerance": tolerance,
        "max_placed": max_placed,
        "proven": proven,
        "attempts": len(records),
        "total_nodes": sum(r["nodes"] for r in records),
        "total_time": sum(r["time"] for r in records),
    }
    return entry, records


def _describe(entry: CapacityEntry) -> str:
    qualifier = "proven" if entry["proven"] else "lower bound"
    return (
        f"N={entry['board_size']}, tolerance={entry['tolerance']}: "
        f"{entry['max_placed']} queens ({qualifier}), nodes={entry['total_nodes']}, "
        f"time={entry['total_time']:.3f}s"
    )


# Runner ---------------------------------------------------------------------

def run_capacity_sweep(
    board_sizes: List[int],
    tolerances: List[int],
    max_target: Optional[int] = None,
    time_limit: Optional[float] = None,
    node_limit: Optional[int] = None,
    parallel: bool = False,
    progress_label: Optional[str] = None,
) -> SweepResults:
    """Measure capacities for every ``(board_size, tolerance)`` pair.

    In parallel mode pairs are distributed across ``settings.NUM_PROCESSES``
    worker processes; each search itself stays single-threaded. Results are
    keyed and ordered by ``(board_size, tolerance)`` either way.
    """
    pairs = [(n, t) for n in board_sizes for t in tolerances]
    params = [(n, t, max_target, time_limit, node_limit) for n, t in pairs]
    progress = ProgressPrinter(len(pairs), progress_label) if progress_label else None

    outputs: List[Tuple[CapacityEntry, List[TargetRecord]]] = []
    if parallel and len(pairs) > 1:
        print(f"  Running {len(pairs)} capacity searches in parallel...")
        with ProcessPoolExecutor(max_workers=min(settings.NUM_PROCESSES, len(pairs))) as executor:
            for index, output in enumerate(executor.map(run_capacity_for_pair, params), start=1):
                outputs.append(output)
                if progress:
                    progress.update(index, _describe(output[0]))
    else:
        for index, item in enumerate(params, start=1):
            output = run_capacity_for_pair(item)
            outputs.append(output)
            if progress:
                progress.update(index, _describe(output[0]))

    results: Any = {"capacity": {}, "records": []}
    for entry, records in outputs:
        results["capacity"][(entry["board_size"], entry["tolerance"])] = entry
        results["records"].extend(records)
    return results


def capacity_table(results: SweepResults) -> Dict[int, Dict[int, int]]:
    """Reshape capacities into ``{board_size: {tolerance: max_placed}}``."""
    table: Dict[int, Dict[int, int]] = {}
    for (board_size, tolerance), entry in sorted(results["capacity"].items()):
        table.setdefault(board_size, {})[tolerance] = entry["max_placed"]
    return table
