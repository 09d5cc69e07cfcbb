"""Quick regression tests for the tolerant queens pipeline."""

import contextlib
import io
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tolerant_queens.analysis import cli


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_solver_and_csv_generation(self):
        """Ensure validator, solver, budget and CSV export succeed for N=4."""
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            cli.run_quick_regression_tests()
        self.assertIn("Quick regression tests passed.", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
