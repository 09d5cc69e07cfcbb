"""Queen placement with a tunable intersection tolerance."""

from .backtracking import SearchOutcome, SearchStatus, solve, solve_with_budget
from .board import Position, render_board
from .session import BoardSession
from .validation import (
    InvalidConfigurationError,
    LineOccupancy,
    check_configuration,
    is_valid,
    line_occupancy,
)

__all__ = [
    "solve",
    "solve_with_budget",
    "SearchOutcome",
    "SearchStatus",
    "is_valid",
    "line_occupancy",
    "check_configuration",
    "LineOccupancy",
    "InvalidConfigurationError",
    "Position",
    "render_board",
    "BoardSession",
]
