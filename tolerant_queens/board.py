"""Board primitives shared by the validator, the solver and the session.

Representation
--------------
A board state is a sequence of ``Position`` values, one per placed queen. The
grid shown to a user (rows of optional markers) is derived from it by index
arithmetic; the core never keeps a 2D structure around.
"""

from __future__ import annotations

import re
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

QUEEN_SYMBOL = "♛"
EMPTY_SYMBOL = "."


class Position(NamedTuple):
    """A single occupied cell, ``(row, column)`` with 0-based indices."""

    row: int
    column: int


Figures = Sequence[Tuple[int, int]]


def as_positions(figures: Iterable[Tuple[int, int]]) -> Tuple[Position, ...]:
    """Normalize any iterable of ``(row, column)`` pairs to a tuple of Positions."""
    return tuple(Position(int(row), int(column)) for row, column in figures)


def next_cell(board_size: int, row: int, column: int) -> Tuple[int, int]:
    """Return the cell right after ``(row, column)`` in row-major order."""
    if column + 1 >= board_size:
        return row + 1, 0
    return row, column + 1


def empty_grid(size: int = 8) -> List[List[Optional[str]]]:
    """Build a ``size`` x ``size`` grid where every cell is ``None``."""
    return [[None for _ in range(size)] for _ in range(size)]


def grid_from_positions(size: int, figures: Figures, symbol: str = QUEEN_SYMBOL) -> List[List[Optional[str]]]:
    grid = empty_grid(size)
    for row, column in figures:
        grid[row][column] = symbol
    return grid


def positions_from_grid(grid: Sequence[Sequence[Optional[str]]]) -> Tuple[Position, ...]:
    """Collect occupied cells of ``grid`` in row-major order."""
    return tuple(
        Position(row, column)
        for row, cells in enumerate(grid)
        for column, cell in enumerate(cells)
        if cell is not None
    )


def render_board(size: int, figures: Figures, piece: str = QUEEN_SYMBOL, empty: str = EMPTY_SYMBOL) -> str:
    """Render the board as text, one line per row, cells separated by spaces."""
    grid = grid_from_positions(size, figures, piece)
    return "\n".join(" ".join(cell if cell is not None else empty for cell in cells) for cells in grid)


def parse_positions(text: str) -> Tuple[Position, ...]:
    """Parse ``"R,C;R,C"`` (or whitespace separated pairs) into Positions.

    Raises ``ValueError`` when a pair is not two integers.
    """
    positions: List[Position] = []
    for token in re.split(r"[;\s]+", re.sub(r"\s*,\s*", ",", text.strip())):
        if not token:
            continue
        parts = [part.strip() for part in token.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Invalid position '{token}'. Expected ROW,COLUMN")
        try:
            positions.append(Position(int(parts[0]), int(parts[1])))
        except ValueError as exc:
            raise ValueError(f"Invalid position '{token}'. Expected integer ROW,COLUMN") from exc
    return tuple(positions)
