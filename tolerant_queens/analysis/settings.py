"""Global settings for the tolerant queens CLI and capacity sweeps.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`tolerant_queens.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board defaults used by --check/--solve when no flag overrides them
BOARD_SIZE: int = 8
QUEEN_COUNT: int = 16
ALLOWED_INTERSECTIONS: int = 1

# Search budget for a single solve (None = no limit)
TIME_LIMIT: Optional[float] = 60.0
NODE_LIMIT: Optional[int] = None

# Capacity sweep grid
SWEEP_BOARD_SIZES: List[int] = [4, 5, 6, 7, 8]
SWEEP_TOLERANCES: List[int] = [0, 1, 2]

# Highest target tried per (size, tolerance); None = size * (tolerance + 1),
# the most queens the row constraint alone permits
SWEEP_MAX_TARGET: Optional[int] = None

# Per-target budget inside a sweep (None = no limit)
SWEEP_TIME_LIMIT: Optional[float] = 30.0
SWEEP_NODE_LIMIT: Optional[int] = 2_000_000

# Run (size, tolerance) pairs in worker processes
SWEEP_PARALLEL: bool = True

# Output directory for CSV and charts
OUT_DIR: str = "results_tolerant_queens"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# When True, sweep outputs carry a datestamp suffix (e.g., _20251113-142530)
# shared by every artifact of the same run.
DATE_IN_FILENAMES: bool = False

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")


def set_limits(
        time_limit: Optional[float] = 60.0,
        node_limit: Optional[int] = None,
        sweep_time_limit: Optional[float] = 30.0,
        sweep_node_limit: Optional[int] = 2_000_000,
) -> None:
        """Configure search budgets for single solves and for sweeps.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global TIME_LIMIT, NODE_LIMIT, SWEEP_TIME_LIMIT, SWEEP_NODE_LIMIT
        TIME_LIMIT = time_limit
        NODE_LIMIT = node_limit
        SWEEP_TIME_LIMIT = sweep_time_limit
        SWEEP_NODE_LIMIT = sweep_node_limit

        print("Search limits configured:")
        print(f"   - Solve time: {TIME_LIMIT}s" if TIME_LIMIT else "   - Solve time: unlimited")
        print(f"   - Solve nodes: {NODE_LIMIT}" if NODE_LIMIT else "   - Solve nodes: unlimited")
        print(f"   - Sweep time: {SWEEP_TIME_LIMIT}s" if SWEEP_TIME_LIMIT else "   - Sweep time: unlimited")
        print(f"   - Sweep nodes: {SWEEP_NODE_LIMIT}" if SWEEP_NODE_LIMIT else "   - Sweep nodes: unlimited")


def filename_suffix() -> str:
    """Return ``_<RUN_ID>`` when date stamping is enabled, else an empty string."""
    return f"_{RUN_ID}" if DATE_IN_FILENAMES else ""
