"""Placement validation with a tunable intersection tolerance.

A placement is valid when no row, column or diagonal holds more than
``tolerance + 1`` queens. Diagonals are identified by index arithmetic:

- sum diagonals share ``row + column``;
- difference diagonals share ``row - column``.

``is_valid`` and ``line_occupancy`` accept any sequence of ``(row, column)``
pairs and trust the caller on bounds. ``check_configuration`` is the optional
fail-fast layer used by the session, the budgeted solver and the CLI.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, NamedTuple, Optional, Tuple


class InvalidConfigurationError(ValueError):
    """Raised when board size, target, tolerance or placed figures are unusable."""


class LineOccupancy(NamedTuple):
    """Largest number of queens found on a single line of each kind."""

    rows: int
    columns: int
    sum_diagonals: int
    difference_diagonals: int

    def intersections(self) -> int:
        """Worst number of extra queens sharing any one line (0 for <= 1 queen)."""
        return max(0, max(self) - 1)

    def violations(self, tolerance: int) -> Tuple[str, ...]:
        """Names of the line kinds exceeding ``tolerance``."""
        return tuple(name for name, count in zip(self._fields, self) if count - 1 > tolerance)


def line_occupancy(figures: Iterable[Tuple[int, int]]) -> LineOccupancy:
    """Count queens per row, column and diagonal in a single pass.

    Running maxima are updated as counters grow, so the counters are never
    scanned a second time. O(P) time and space for P figures.
    """
    rows: Counter[int] = Counter()
    columns: Counter[int] = Counter()
    sum_diagonals: Counter[int] = Counter()
    difference_diagonals: Counter[int] = Counter()
    max_rows = max_columns = max_sum = max_difference = 0

    for row, column in figures:
        rows[row] += 1
        max_rows = max(max_rows, rows[row])

        columns[column] += 1
        max_columns = max(max_columns, columns[column])

        sum_diagonals[row + column] += 1
        max_sum = max(max_sum, sum_diagonals[row + column])

        difference_diagonals[row - column] += 1
        max_difference = max(max_difference, difference_diagonals[row - column])

    return LineOccupancy(max_rows, max_columns, max_sum, max_difference)


def is_valid(figures: Iterable[Tuple[int, int]], tolerance: int) -> bool:
    """Return True if every line holds at most ``tolerance + 1`` queens.

    A queen never intersects itself, so a line with a single queen counts as
    zero intersections. The empty placement is always valid.
    """
    return all(count - 1 <= tolerance for count in line_occupancy(figures))


def check_configuration(
    board_size: int,
    target_count: int,
    tolerance: int,
    figures: Iterable[Tuple[int, int]] = (),
    max_figures: Optional[int] = None,
) -> None:
    """Fail fast on configurations the search cannot meaningfully handle.

    Contract
    - ``board_size``: int >= 1
    - ``target_count``: int >= 0
    - ``tolerance``: int >= 0
    - ``figures``: in-bounds cells, no duplicates, at most ``max_figures``
      of them (defaults to ``target_count``)

    Raises ``InvalidConfigurationError`` describing the first problem found.
    """
    for name, value, minimum in (
        ("board size", board_size, 1),
        ("target count", target_count, 0),
        ("tolerance", tolerance, 0),
    ):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfigurationError(f"The {name} must be an integer, got {value!r}")
        if value < minimum:
            raise InvalidConfigurationError(f"The {name} must be >= {minimum}, got {value}")

    seen = set()
    for row, column in figures:
        if not (0 <= row < board_size and 0 <= column < board_size):
            raise InvalidConfigurationError(
                f"Position ({row}, {column}) is outside a {board_size}x{board_size} board"
            )
        if (row, column) in seen:
            raise InvalidConfigurationError(f"Position ({row}, {column}) is occupied twice")
        seen.add((row, column))

    limit = target_count if max_figures is None else max_figures
    if len(seen) > limit:
        raise InvalidConfigurationError(
            f"{len(seen)} queens are already placed but at most {limit} are allowed"
        )
