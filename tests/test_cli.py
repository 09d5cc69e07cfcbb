"""CLI wiring: configuration application, check/solve modes and exit codes."""

import contextlib
import io
import json
from pathlib import Path
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tolerant_queens.analysis import cli, settings


def run_cli(argv):
    """Run ``cli.main`` and return ``(exit_code, stdout)``."""
    buffer = io.StringIO()
    code = 0
    with contextlib.redirect_stdout(buffer):
        try:
            cli.main(argv)
        except SystemExit as exc:
            code = exc.code
    return code, buffer.getvalue()


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.json"
        self.config_path.write_text(json.dumps({
            "board_defaults": {"board_size": 4, "queen_count": 4, "allowed_intersections": 0},
            "search_limits": {"time_limit": 10.0, "node_limit": None},
            "sweep_settings": {
                "board_sizes": [3, 4],
                "tolerances": [0],
                "max_target": None,
                "output_dir": str(Path(self._tmp.name) / "out"),
                "parallel": False,
            },
        }))

    def tearDown(self):
        self._tmp.cleanup()

    def test_apply_configuration_updates_settings(self):
        with contextlib.redirect_stdout(io.StringIO()):
            cli.apply_configuration(str(self.config_path))
        self.assertEqual(settings.BOARD_SIZE, 4)
        self.assertEqual(settings.QUEEN_COUNT, 4)
        self.assertEqual(settings.ALLOWED_INTERSECTIONS, 0)
        self.assertEqual(settings.TIME_LIMIT, 10.0)
        self.assertIsNone(settings.NODE_LIMIT)
        self.assertEqual(settings.SWEEP_BOARD_SIZES, [3, 4])
        self.assertFalse(settings.SWEEP_PARALLEL)

    def test_parse_helpers(self):
        self.assertEqual(cli.parse_place_arguments(["0,1", "1,3;2,0"]), ((0, 1), (1, 3), (2, 0)))
        self.assertEqual(cli.parse_place_arguments(None), ())
        self.assertEqual(cli.parse_int_list("4, 5,6"), [4, 5, 6])
        self.assertIsNone(cli.parse_int_list(None))
        with self.assertRaises(ValueError):
            cli.parse_int_list("4,x")

    def test_check_valid_solution(self):
        code, out = run_cli(["--check", "--config", str(self.config_path), "-p", "0,1;1,3;2,0;3,2"])
        self.assertEqual(code, 0)
        self.assertIn("This is a valid solution.", out)

    def test_check_reports_violations(self):
        code, out = run_cli(["--check", "--config", str(self.config_path), "-p", "0,0", "-p", "0,3"])
        self.assertEqual(code, 2)
        self.assertIn("rows", out)
        self.assertIn("This is not a solution to the problem", out)

    def test_check_requires_count_when_given(self):
        code, out = run_cli(["--check", "--config", str(self.config_path), "-p", "0,1", "--count", "4"])
        self.assertEqual(code, 2)
        self.assertIn("Queens placed: 1/4", out)

    def test_check_empty_board_is_valid(self):
        code, out = run_cli(["--check", "--config", str(self.config_path)])
        self.assertEqual(code, 0)
        self.assertIn("Queens placed: 0/0", out)
        self.assertIn("This is a valid solution.", out)

    def test_check_with_zero_count_judges_validity(self):
        code, out = run_cli(["--check", "--config", str(self.config_path), "-p", "0,1", "--count", "0"])
        self.assertEqual(code, 0)
        self.assertIn("This is a valid solution.", out)

        code, out = run_cli(["--check", "--config", str(self.config_path), "-p", "0,0;0,3", "--count", "0"])
        self.assertEqual(code, 2)
        self.assertIn("This is not a solution to the problem", out)

    def test_solve_prints_board(self):
        code, out = run_cli(["--solve", "--config", str(self.config_path)])
        self.assertEqual(code, 0)
        self.assertIn("Solved in", out)
        self.assertEqual(out.count("♛"), 4)

    def test_solve_without_solution(self):
        code, out = run_cli(["--solve", "--config", str(self.config_path), "--count", "5"])
        self.assertEqual(code, 2)
        self.assertIn("There is no solution", out)

    def test_solve_budget_exceeded(self):
        code, out = run_cli(["--solve", "--config", str(self.config_path), "--node-limit", "1"])
        self.assertEqual(code, 2)
        self.assertIn("search budget", out)

    def test_invalid_input_exits_with_one(self):
        code, out = run_cli(["--solve", "--config", str(self.config_path), "-p", "9,9"])
        self.assertEqual(code, 1)
        self.assertIn("Execution error", out)

    def test_missing_explicit_config(self):
        code, out = run_cli(["--check", "--config", str(Path(self._tmp.name) / "nope.json")])
        self.assertEqual(code, 1)
        self.assertIn("Configuration file not found", out)

    def test_a_mode_is_required(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main([])


if __name__ == "__main__":
    unittest.main()
