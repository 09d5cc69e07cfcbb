"""Validator behaviour: tolerance semantics, line counting and input checks."""

from itertools import permutations
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tolerant_queens.validation import (
    InvalidConfigurationError,
    LineOccupancy,
    check_configuration,
    is_valid,
    line_occupancy,
)

FOUR_QUEENS = [(0, 1), (1, 3), (2, 0), (3, 2)]


class IsValidTests(unittest.TestCase):
    def test_empty_placement_is_valid(self):
        for tolerance in range(4):
            self.assertTrue(is_valid([], tolerance))

    def test_single_queen_is_valid(self):
        for cell in [(0, 0), (3, 7), (5, 5)]:
            self.assertTrue(is_valid([cell], 0))

    def test_classic_four_queens(self):
        self.assertTrue(is_valid(FOUR_QUEENS, 0))

    def test_same_row_needs_one_intersection(self):
        self.assertFalse(is_valid([(0, 0), (0, 1)], 0))
        self.assertTrue(is_valid([(0, 0), (0, 1)], 1))

    def test_each_line_kind_is_checked(self):
        cases = {
            "column": [(0, 2), (3, 2)],
            "sum diagonal": [(0, 3), (3, 0)],
            "difference diagonal": [(1, 0), (3, 2)],
        }
        for label, figures in cases.items():
            with self.subTest(line=label):
                self.assertFalse(is_valid(figures, 0))
                self.assertTrue(is_valid(figures, 1))

    def test_three_on_a_row_needs_two_intersections(self):
        figures = [(2, 0), (2, 3), (2, 5)]
        self.assertFalse(is_valid(figures, 1))
        self.assertTrue(is_valid(figures, 2))

    def test_order_does_not_matter(self):
        figures = [(0, 0), (0, 1), (1, 1), (2, 3)]
        expected = is_valid(figures, 1)
        for ordering in permutations(figures):
            self.assertEqual(is_valid(list(ordering), 1), expected)

    def test_monotonic_in_tolerance(self):
        figures = [(0, 0), (0, 1), (0, 2), (1, 1), (2, 2)]
        first_valid = next(t for t in range(5) if is_valid(figures, t))
        for tolerance in range(first_valid, first_valid + 4):
            self.assertTrue(is_valid(figures, tolerance))
        for tolerance in range(first_valid):
            self.assertFalse(is_valid(figures, tolerance))


class LineOccupancyTests(unittest.TestCase):
    def test_classic_solution_has_one_per_line(self):
        occupancy = line_occupancy(FOUR_QUEENS)
        self.assertEqual(occupancy, LineOccupancy(1, 1, 1, 1))
        self.assertEqual(occupancy.intersections(), 0)

    def test_empty_placement(self):
        occupancy = line_occupancy([])
        self.assertEqual(occupancy, LineOccupancy(0, 0, 0, 0))
        self.assertEqual(occupancy.intersections(), 0)

    def test_reports_violating_line_kinds(self):
        occupancy = line_occupancy([(0, 0), (0, 1), (1, 1)])
        self.assertEqual(occupancy, LineOccupancy(2, 2, 1, 2))
        self.assertEqual(occupancy.violations(0), ("rows", "columns", "difference_diagonals"))
        self.assertEqual(occupancy.violations(1), ())
        self.assertEqual(occupancy.intersections(), 1)


class CheckConfigurationTests(unittest.TestCase):
    def test_accepts_valid_configuration(self):
        check_configuration(4, 4, 0, FOUR_QUEENS)
        check_configuration(1, 0, 0)

    def test_rejects_bad_numbers(self):
        for args in [(0, 1, 0), (4, -1, 0), (4, 4, -1), (4.0, 4, 0), (True, 1, 0)]:
            with self.subTest(args=args):
                with self.assertRaises(InvalidConfigurationError):
                    check_configuration(*args)

    def test_rejects_out_of_bounds_positions(self):
        for cell in [(4, 0), (0, 4), (-1, 2)]:
            with self.subTest(cell=cell):
                with self.assertRaises(InvalidConfigurationError):
                    check_configuration(4, 4, 0, [cell])

    def test_rejects_duplicates(self):
        with self.assertRaises(InvalidConfigurationError):
            check_configuration(4, 4, 0, [(1, 1), (1, 1)])

    def test_rejects_more_figures_than_target(self):
        with self.assertRaises(InvalidConfigurationError):
            check_configuration(4, 2, 0, [(0, 0), (1, 2), (2, 1)])
        check_configuration(4, 2, 0, [(0, 0), (1, 2), (2, 1)], max_figures=16)

    def test_is_a_value_error(self):
        self.assertTrue(issubclass(InvalidConfigurationError, ValueError))


if __name__ == "__main__":
    unittest.main()
