"""Interactive board state, independent of any particular front end.

A ``BoardSession`` holds what a user is editing: the board size, the number
of queens the puzzle asks for, the allowed intersections, and the queens
placed so far. Front ends (the CLI, or anything else) call its methods and
render ``render()`` or ``figures``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Set, Tuple

from .backtracking import SearchOutcome, SearchStatus, solve_with_budget
from .board import Position, render_board
from .validation import InvalidConfigurationError, LineOccupancy, check_configuration, line_occupancy

VALID_SOLUTION_MESSAGE = "This is a valid solution."
NOT_A_SOLUTION_MESSAGE = "This is not a solution to the problem"
NO_SOLUTION_MESSAGE = "There is no solution"
BUDGET_EXCEEDED_MESSAGE = "No solution found within the search budget"


@dataclass(frozen=True)
class AnswerCheck:
    is_solution: bool
    placed: int
    required: int
    occupancy: LineOccupancy

    @property
    def message(self) -> str:
        return VALID_SOLUTION_MESSAGE if self.is_solution else NOT_A_SOLUTION_MESSAGE


def outcome_message(outcome: SearchOutcome) -> str:
    """Human readable summary of an autosolve attempt."""
    if outcome.status is SearchStatus.SOLVED:
        return f"Solved in {outcome.nodes} nodes ({outcome.elapsed:.3f}s)"
    if outcome.status is SearchStatus.UNSATISFIABLE:
        return NO_SOLUTION_MESSAGE
    return f"{BUDGET_EXCEEDED_MESSAGE} ({outcome.nodes} nodes, {outcome.elapsed:.3f}s)"


class BoardSession:
    """Mutable editing session around the immutable solver core.

    Parameters
    ----------
    board_size : int, default 8
    queen_count : int, default 16
        Queens a complete answer must hold; also caps manual placement.
    allowed_intersections : int, default 1
    """

    def __init__(self, board_size: int = 8, queen_count: int = 16, allowed_intersections: int = 1):
        check_configuration(board_size, queen_count, allowed_intersections)
        if queen_count < 1:
            raise InvalidConfigurationError(f"The queen count must be >= 1, got {queen_count}")
        self._board_size = board_size
        self._queen_count = queen_count
        self._allowed_intersections = allowed_intersections
        self._figures: Set[Position] = set()

    @property
    def board_size(self) -> int:
        return self._board_size

    @property
    def queen_count(self) -> int:
        return self._queen_count

    @queen_count.setter
    def queen_count(self, value: int) -> None:
        check_configuration(self._board_size, value, self._allowed_intersections)
        if value < 1:
            raise InvalidConfigurationError(f"The queen count must be >= 1, got {value}")
        self._queen_count = value

    @property
    def allowed_intersections(self) -> int:
        return self._allowed_intersections

    @allowed_intersections.setter
    def allowed_intersections(self, value: int) -> None:
        check_configuration(self._board_size, self._queen_count, value)
        self._allowed_intersections = value

    @property
    def figures(self) -> Tuple[Position, ...]:
        """Placed queens in row-major order."""
        return tuple(sorted(self._figures))

    def has_piece(self, row: int, column: int) -> bool:
        return Position(row, column) in self._figures

    def toggle(self, row: int, column: int) -> bool:
        """Remove the queen at ``(row, column)`` or place one there.

        Placing is refused (returns False) once ``queen_count`` queens are on
        the board; removing is always allowed.
        """
        if not (0 <= row < self._board_size and 0 <= column < self._board_size):
            raise InvalidConfigurationError(
                f"Cell ({row}, {column}) is outside a {self._board_size}x{self._board_size} board"
            )
        position = Position(row, column)
        if position in self._figures:
            self._figures.remove(position)
            return True
        if len(self._figures) >= self._queen_count:
            return False
        self._figures.add(position)
        return True

    def clear(self) -> None:
        self._figures = set()

    def resize(self, board_size: int) -> None:
        """Change the board size; the board is cleared."""
        check_configuration(board_size, self._queen_count, self._allowed_intersections)
        self._board_size = board_size
        self.clear()

    def autosolve(self, time_limit: Optional[float] = None, node_limit: Optional[int] = None) -> SearchOutcome:
        """Complete the current placement; the board only changes on success."""
        outcome = solve_with_budget(
            self._board_size,
            self.figures,
            self._queen_count,
            self._allowed_intersections,
            time_limit=time_limit,
            node_limit=node_limit,
        )
        if outcome.solution is not None:
            self._figures = set(outcome.solution)
        return outcome

    def check_answer(self) -> AnswerCheck:
        figures = self.figures
        occupancy = line_occupancy(figures)
        enough = len(figures) >= self._queen_count
        valid = not occupancy.violations(self._allowed_intersections)
        return AnswerCheck(enough and valid, len(figures), self._queen_count, occupancy)

    def render(self) -> str:
        return render_board(self._board_size, self.figures)
