"""Backtracking completion of a partial queen placement.

This module extends an already placed set of queens to ``target_count``
queens such that no row, column or diagonal holds more than
``tolerance + 1`` of them. It provides two entry points:

- solve(board_size, figures_on_board, target_count, tolerance, ...): the plain
    recursive search. Returns the completed placement or ``None`` when no
    completion exists.
- solve_with_budget(..., time_limit=None, node_limit=None): the same search
    behind an input check and an optional wall-clock/node budget, returning a
    ``SearchOutcome`` that tells "no solution exists" apart from "gave up".

Implementation overview
-----------------------
- State representation: a tuple of ``Position`` in placement order. Every
    recursive call receives its own extended tuple; nothing is undone on
    backtrack because nothing is shared between sibling branches.
- Pruning: each call runs the validator on its placement first, so an invalid
    extension dies one level below the placement that broke it.
- Ordering: candidates are scanned in row-major order from a resume cursor
    ``(start_row, start_column)``. A child resumes right after the cell it
    placed, so queens are always added in increasing cell order. This removes
    permutation duplicates and guarantees termination.
- Determinism: equal inputs explore the same tree and return the same
    solution (the leftmost one in row-major order).

Recursion depth is at most the number of queens still to place, which is
bounded by ``board_size ** 2``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Optional, Sequence, Tuple

from .board import Position, as_positions, next_cell
from .validation import check_configuration, is_valid

Solution = Tuple[Position, ...]


class SearchStatus(enum.Enum):
    SOLVED = "solved"
    UNSATISFIABLE = "unsatisfiable"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a budgeted search.

    ``nodes`` counts search calls; each of them runs the validator once.
    """

    status: SearchStatus
    solution: Optional[Solution]
    nodes: int
    elapsed: float

    @property
    def solution_found(self) -> bool:
        return self.status is SearchStatus.SOLVED


class _BudgetExhausted(Exception):
    """Unwinds the recursion once the search budget runs out."""


class _SearchBudget:
    """Node and wall-clock accounting shared by one budgeted search."""

    def __init__(self, time_limit: Optional[float], node_limit: Optional[int]):
        self.time_limit = time_limit
        self.node_limit = node_limit
        self.nodes = 0
        self.start = perf_counter()

    def elapsed(self) -> float:
        return perf_counter() - self.start

    def visit(self) -> None:
        if self.node_limit is not None and self.nodes >= self.node_limit:
            raise _BudgetExhausted()
        if self.time_limit is not None and self.elapsed() > self.time_limit:
            raise _BudgetExhausted()
        self.nodes += 1


def _search(
    board_size: int,
    figures_on_board: Solution,
    target_count: int,
    tolerance: int,
    start_row: int,
    start_column: int,
    visit: Optional[Callable[[], None]],
) -> Optional[Solution]:
    if visit is not None:
        visit()

    if not is_valid(figures_on_board, tolerance):
        return None

    if len(figures_on_board) == target_count:
        return figures_on_board

    occupied = set(figures_on_board)
    for row in range(start_row, board_size):
        # Only the first row resumes mid-way; later rows are scanned in full.
        first_column = start_column if row == start_row else 0
        for column in range(first_column, board_size):
            if (row, column) in occupied:
                continue

            next_row, next_column = next_cell(board_size, row, column)
            solution = _search(
                board_size,
                figures_on_board + (Position(row, column),),
                target_count,
                tolerance,
                next_row,
                next_column,
                visit,
            )
            if solution is not None:
                return solution

    return None


def solve(
    board_size: int,
    figures_on_board: Sequence[Tuple[int, int]],
    target_count: int,
    tolerance: int,
    start_row: int = 0,
    start_column: int = 0,
) -> Optional[Solution]:
    """Complete ``figures_on_board`` to ``target_count`` queens.

    Parameters
    ----------
    board_size : int
        Board dimension N (N >= 1).
    figures_on_board : sequence of (row, column)
        Queens already placed; in bounds and without duplicates.
    target_count : int
        Number of queens the completed board must hold.
    tolerance : int
        Extra queens allowed on any row, column or diagonal (0 = classic).
    start_row, start_column : int
        Resume cursor; cells before it in row-major order are not tried.

    Returns
    -------
    tuple[Position, ...] | None
        The given figures followed by the added ones in placement order, or
        ``None`` when no valid completion exists. A seed that is already
        invalid yields ``None`` whatever the target.

    Complexity
    ----------
    Exponential in the worst case. No input checking is done here; see
    ``solve_with_budget`` for the guarded variant.
    """
    return _search(
        board_size,
        as_positions(figures_on_board),
        target_count,
        tolerance,
        start_row,
        start_column,
        None,
    )


def solve_with_budget(
    board_size: int,
    figures_on_board: Sequence[Tuple[int, int]],
    target_count: int,
    tolerance: int,
    time_limit: Optional[float] = None,
    node_limit: Optional[int] = None,
) -> SearchOutcome:
    """Run ``solve`` behind input checks and an optional search budget.

    Raises ``InvalidConfigurationError`` before searching when the inputs are
    out of contract. Otherwise returns a ``SearchOutcome``:

    - ``SOLVED`` with the same solution ``solve`` would return;
    - ``UNSATISFIABLE`` when the whole space was explored without success;
    - ``BUDGET_EXCEEDED`` when ``time_limit`` seconds or ``node_limit`` search
      calls ran out first. Nothing is proven in that case.
    """
    figures = as_positions(figures_on_board)
    check_configuration(board_size, target_count, tolerance, figures)

    budget = _SearchBudget(time_limit, node_limit)
    try:
        solution = _search(board_size, figures, target_count, tolerance, 0, 0, budget.visit)
    except _BudgetExhausted:
        return SearchOutcome(SearchStatus.BUDGET_EXCEEDED, None, budget.nodes, budget.elapsed())

    status = SearchStatus.SOLVED if solution is not None else SearchStatus.UNSATISFIABLE
    return SearchOutcome(status, solution, budget.nodes, budget.elapsed())
