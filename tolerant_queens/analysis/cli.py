"""Command-line interface for checking, solving and sweeping queen placements.

This module wires together configuration loading, the board session, and the
capacity sweep pipeline. It isolates I/O, argument parsing, and progress
reporting from the core modules so that the rest of the codebase remains easy
to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from . import settings
from .experiments import capacity_table, run_capacity_sweep
from .plots import plot_and_save
from .reporting import (
    capacity_pivot,
    save_capacity_pivot,
    save_capacity_to_csv,
    save_raw_records_to_csv,
    save_status_summary,
)
from config_manager import ConfigManager
from tolerant_queens.backtracking import SearchStatus, solve, solve_with_budget
from tolerant_queens.board import Position, parse_positions
from tolerant_queens.session import (
    NOT_A_SOLUTION_MESSAGE,
    VALID_SOLUTION_MESSAGE,
    BoardSession,
    outcome_message,
)
from tolerant_queens.validation import check_configuration, is_valid

DEFAULT_CONFIG = "config.json"


# ------------- Utils --------------------------------------------------------

def parse_place_arguments(place_args: Optional[List[str]]) -> Tuple[Position, ...]:
    """Normalize ``--place`` inputs into a flat tuple of positions.

    Accepts repeated flags (e.g., ``-p 0,1 -p 1,3``) and semicolon separated
    lists (e.g., ``-p "0,1;1,3"``).
    """
    if not place_args:
        return ()
    positions: List[Position] = []
    for entry in place_args:
        positions.extend(parse_positions(entry))
    return tuple(positions)


def parse_int_list(text: Optional[str]) -> Optional[List[int]]:
    """Parse ``"4,5,6"`` into ``[4, 5, 6]``; None passes through."""
    if text is None:
        return None
    values: List[int] = []
    for token in text.split(","):
        token = token.strip()
        if token:
            try:
                values.append(int(token))
            except ValueError as exc:
                raise ValueError(f"Expected a comma-separated list of integers, got '{text}'") from exc
    return values


def _optional_number(value, cast):
    return None if value is None else cast(value)


def apply_configuration(config_path: Optional[str]) -> Optional[ConfigManager]:
    """Load configuration and update the global ``settings`` module in-place.

    When ``config_path`` is None the default ``config.json`` is used if it
    exists; a missing default file keeps the module defaults. An explicitly
    requested file that does not exist raises ``FileNotFoundError``.
    """
    if config_path is None:
        if not Path(DEFAULT_CONFIG).exists():
            return None
        config_path = DEFAULT_CONFIG

    config_mgr = ConfigManager(config_path)

    board_defaults = config_mgr.get_board_defaults()
    if board_defaults:
        settings.BOARD_SIZE = int(board_defaults.get("board_size", settings.BOARD_SIZE))
        settings.QUEEN_COUNT = int(board_defaults.get("queen_count", settings.QUEEN_COUNT))
        settings.ALLOWED_INTERSECTIONS = int(
            board_defaults.get("allowed_intersections", settings.ALLOWED_INTERSECTIONS)
        )

    search_limits = config_mgr.get_search_limits()
    if search_limits:
        settings.set_limits(
            time_limit=_optional_number(search_limits.get("time_limit", settings.TIME_LIMIT), float),
            node_limit=_optional_number(search_limits.get("node_limit", settings.NODE_LIMIT), int),
            sweep_time_limit=_optional_number(search_limits.get("sweep_time_limit", settings.SWEEP_TIME_LIMIT), float),
            sweep_node_limit=_optional_number(search_limits.get("sweep_node_limit", settings.SWEEP_NODE_LIMIT), int),
        )

    sweep_settings = config_mgr.get_sweep_settings()
    if sweep_settings:
        settings.SWEEP_BOARD_SIZES = [int(n) for n in sweep_settings.get("board_sizes", settings.SWEEP_BOARD_SIZES)]
        settings.SWEEP_TOLERANCES = [int(t) for t in sweep_settings.get("tolerances", settings.SWEEP_TOLERANCES)]
        settings.SWEEP_MAX_TARGET = _optional_number(sweep_settings.get("max_target", settings.SWEEP_MAX_TARGET), int)
        settings.OUT_DIR = sweep_settings.get("output_dir", settings.OUT_DIR)
        settings.SWEEP_PARALLEL = bool(sweep_settings.get("parallel", settings.SWEEP_PARALLEL))

    return config_mgr


# ------------- Modes ------------------------------------------------------

def run_check(board_size: int, figures: Sequence[Position], queen_count: Optional[int], tolerance: int) -> bool:
    """Print whether ``figures`` answers the puzzle; return that verdict.

    Without ``queen_count`` only validity is judged (the placed count is
    taken as the required one).
    """
    required = len(figures) if queen_count is None else queen_count
    check_configuration(board_size, required, tolerance, figures, max_figures=board_size * board_size)

    # Manual placement is capped at queen_count, so lift the cap while loading.
    session = BoardSession(board_size, max(1, required, len(figures)), tolerance)
    for row, column in figures:
        session.toggle(row, column)
    session.queen_count = max(1, required)

    answer = session.check_answer()
    violations = answer.occupancy.violations(tolerance)
    # The session needs at least one queen; a zero requirement is judged on validity alone.
    is_solution = answer.is_solution if required > 0 else not violations
    print(session.render())
    print(
        f"Queens placed: {answer.placed}/{required}, "
        f"max per row={answer.occupancy.rows}, column={answer.occupancy.columns}, "
        f"sum diagonal={answer.occupancy.sum_diagonals}, "
        f"difference diagonal={answer.occupancy.difference_diagonals}"
    )
    if violations:
        print(f"Lines over the tolerance of {tolerance}: {', '.join(violations)}")
    print(VALID_SOLUTION_MESSAGE if is_solution else NOT_A_SOLUTION_MESSAGE)
    return is_solution


def run_solve(
    board_size: int,
    figures: Sequence[Position],
    queen_count: int,
    tolerance: int,
    time_limit: Optional[float],
    node_limit: Optional[int],
) -> bool:
    """Complete ``figures`` to ``queen_count`` queens and print the board."""
    check_configuration(board_size, queen_count, tolerance, figures)
    session = BoardSession(board_size, queen_count, tolerance)
    for row, column in figures:
        session.toggle(row, column)

    print(f"Solving N={board_size}, queens={queen_count}, allowed intersections={tolerance}, placed={len(figures)}")
    outcome = session.autosolve(time_limit=time_limit, node_limit=node_limit)
    print(outcome_message(outcome))
    if outcome.status is SearchStatus.SOLVED:
        print(session.render())
    return outcome.status is SearchStatus.SOLVED


def run_sweep(
    board_sizes: List[int],
    tolerances: List[int],
    out_dir: str,
    parallel: bool,
) -> None:
    """Run the capacity sweep and write CSV files and charts to ``out_dir``."""
    for board_size in board_sizes:
        for tolerance in tolerances:
            check_configuration(board_size, 0, tolerance)

    os.makedirs(out_dir, exist_ok=True)
    print("\n" + "=" * 70)
    print(f"CAPACITY SWEEP: sizes={board_sizes}, tolerances={tolerances}")
    print("=" * 70)

    start_total = perf_counter()
    results = run_capacity_sweep(
        board_sizes,
        tolerances,
        max_target=settings.SWEEP_MAX_TARGET,
        time_limit=settings.SWEEP_TIME_LIMIT,
        node_limit=settings.SWEEP_NODE_LIMIT,
        parallel=parallel,
        progress_label="Capacity",
    )

    save_capacity_to_csv(results, out_dir)
    save_raw_records_to_csv(results, out_dir)
    save_capacity_pivot(results, out_dir)
    save_status_summary(results, out_dir)
    plot_and_save(results, out_dir)

    print("\nCapacity (rows: N, columns: allowed intersections):")
    print(capacity_pivot(results).to_string())

    total_time = perf_counter() - start_total
    print(f"\nSweep completed in {total_time:.1f}s")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of validator, solver and sweep.

    Verifies that:
    - The classic 4-Queens answer is valid and a same-row pair is not.
    - 4 queens fit on 4x4 with no intersections while 5 provably do not.
    - A budget of a single node is reported as exceeded, not unsatisfiable.
    - The sweep pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=4)...")

    if not is_valid([(0, 1), (1, 3), (2, 0), (3, 2)], 0):
        raise AssertionError("The classic 4-Queens answer was rejected.")
    if is_valid([(0, 0), (0, 1)], 0) or not is_valid([(0, 0), (0, 1)], 1):
        raise AssertionError("Same-row tolerance handling is wrong.")
    print("  Validator: ok")

    solution = solve(4, [], 4, 0)
    if solution is None or len(solution) != 4 or not is_valid(solution, 0):
        raise AssertionError(f"solve(4, [], 4, 0) returned {solution}.")
    if solve(4, [], 5, 0) is not None:
        raise AssertionError("solve(4, [], 5, 0) found an impossible placement.")
    print(f"  Solver: 4x4 -> {list(solution)}")

    outcome = solve_with_budget(4, [], 4, 0, node_limit=1)
    if outcome.status is not SearchStatus.BUDGET_EXCEEDED:
        raise AssertionError(f"Node limit of 1 produced {outcome.status}.")
    print("  Budget: ok")

    results = run_capacity_sweep([4], [0], parallel=False)
    if capacity_table(results) != {4: {0: 4}}:
        raise AssertionError(f"Unexpected 4x4 capacity: {capacity_table(results)}")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_capacity_to_csv(results, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Capacity CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Check, complete or sweep queen placements with allowed intersections.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--check", action="store_true", help="Check whether the placed queens answer the puzzle.")
    mode.add_argument("--solve", action="store_true", help="Complete the placed queens to --count queens.")
    mode.add_argument("--sweep", action="store_true", help="Measure queen capacity over board sizes and tolerances.")
    mode.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--size", "-n", type=int, help="Board size N (default from config).")
    parser.add_argument("--count", "-c", type=int, help="Queens required on the board (default from config; --check: placed count).")
    parser.add_argument("--tolerance", "-t", type=int, help="Allowed intersections per line (default from config).")
    parser.add_argument(
        "--place",
        "-p",
        action="append",
        help="Placed queen as ROW,COLUMN (repeatable, or several separated by ';').",
    )
    parser.add_argument("--time-limit", type=float, help="Search time limit in seconds for --solve.")
    parser.add_argument("--node-limit", type=int, help="Search node limit for --solve.")
    parser.add_argument("--sizes", help="Sweep board sizes, comma-separated (default from config).")
    parser.add_argument("--tolerances", help="Sweep tolerances, comma-separated (default from config).")
    parser.add_argument("--out-dir", help="Sweep output directory (default from config).")
    parser.add_argument("--sequential", action="store_true", help="Run the sweep in a single process.")
    parser.add_argument("--config", default=None, help=f"Path to configuration file (default: {DEFAULT_CONFIG} if present).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen mode."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        apply_configuration(args.config)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    board_size = args.size if args.size is not None else settings.BOARD_SIZE
    tolerance = args.tolerance if args.tolerance is not None else settings.ALLOWED_INTERSECTIONS
    time_limit = args.time_limit if args.time_limit is not None else settings.TIME_LIMIT
    node_limit = args.node_limit if args.node_limit is not None else settings.NODE_LIMIT

    try:
        figures = parse_place_arguments(args.place)
        if args.check:
            if not run_check(board_size, figures, args.count, tolerance):
                raise SystemExit(2)
        elif args.solve:
            queen_count = args.count if args.count is not None else settings.QUEEN_COUNT
            if not run_solve(board_size, figures, queen_count, tolerance, time_limit, node_limit):
                raise SystemExit(2)
        else:
            run_sweep(
                parse_int_list(args.sizes) or settings.SWEEP_BOARD_SIZES,
                parse_int_list(args.tolerances) or settings.SWEEP_TOLERANCES,
                args.out_dir or settings.OUT_DIR,
                parallel=settings.SWEEP_PARALLEL and not args.sequential,
            )
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
