"""
Analysis and orchestration package for tolerant queens.

This package contains:
- settings: global knobs and search budgets
- stats: typed result shapes and aggregation helpers
- experiments: capacity sweep runners (sequential and parallel)
- reporting: CSV exports and pandas pivots
- plots: visualization utilities
- cli: top-level entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    TargetRecord,
    CapacityEntry,
    SweepResults,
    compute_detailed_statistics,
    summarize_by_status,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "TargetRecord",
    "CapacityEntry",
    "SweepResults",
    # utils
    "compute_detailed_statistics",
    "summarize_by_status",
    "ProgressPrinter",
    # settings module
    "settings",
]
