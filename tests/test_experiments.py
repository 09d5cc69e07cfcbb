"""Capacity sweep, CSV exports and charts."""

import csv
import os
from pathlib import Path
import sys
import tempfile
import unittest

os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tolerant_queens.analysis.experiments import (
    capacity_table,
    default_max_target,
    run_capacity_for_pair,
    run_capacity_sweep,
)
from tolerant_queens.analysis.plots import plot_and_save
from tolerant_queens.analysis.reporting import (
    capacity_frame,
    capacity_pivot,
    save_capacity_pivot,
    save_capacity_to_csv,
    save_raw_records_to_csv,
    save_status_summary,
)
from tolerant_queens.analysis.stats import compute_detailed_statistics, summarize_by_status


class CapacitySweepTests(unittest.TestCase):
    def test_default_max_target(self):
        self.assertEqual(default_max_target(8, 0), 8)
        self.assertEqual(default_max_target(8, 1), 16)

    def test_four_by_four_capacity_is_proven(self):
        entry, records = run_capacity_for_pair((4, 0, 5, None, None))
        self.assertEqual(entry["max_placed"], 4)
        self.assertTrue(entry["proven"])
        self.assertEqual(entry["attempts"], 5)
        self.assertEqual([r["status"] for r in records], ["solved"] * 4 + ["unsatisfiable"])
        self.assertEqual(entry["total_nodes"], sum(r["nodes"] for r in records))

    def test_budget_stop_is_a_lower_bound(self):
        entry, records = run_capacity_for_pair((4, 0, None, None, 1))
        self.assertEqual(entry["max_placed"], 0)
        self.assertFalse(entry["proven"])
        self.assertEqual(records[-1]["status"], "budget_exceeded")

    def test_sweep_small_boards(self):
        results = run_capacity_sweep([2, 3], [0, 1], parallel=False)
        self.assertEqual(capacity_table(results), {2: {0: 1, 1: 4}, 3: {0: 2, 1: 6}})
        self.assertTrue(results["capacity"][(2, 0)]["proven"])
        self.assertTrue(results["capacity"][(3, 0)]["proven"])
        # Capacities that hit the row bound are proven without an unsatisfiable attempt.
        self.assertTrue(results["capacity"][(2, 1)]["proven"])
        self.assertTrue(results["capacity"][(3, 1)]["proven"])
        self.assertEqual(results["capacity"][(2, 1)]["attempts"], 4)

    def test_parallel_matches_sequential(self):
        sequential = run_capacity_sweep([2, 3], [0], parallel=False)
        parallel = run_capacity_sweep([2, 3], [0], parallel=True)
        self.assertEqual(capacity_table(sequential), capacity_table(parallel))
        self.assertEqual(
            [(r["board_size"], r["target"], r["status"]) for r in sequential["records"]],
            [(r["board_size"], r["target"], r["status"]) for r in parallel["records"]],
        )


class ReportingTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.results = run_capacity_sweep([2, 3, 4], [0, 1], max_target=6, parallel=False)

    def test_frames(self):
        frame = capacity_frame(self.results)
        self.assertEqual(len(frame), 6)
        self.assertEqual(list(frame["board_size"]), [2, 2, 3, 3, 4, 4])
        pivot = capacity_pivot(self.results)
        self.assertEqual(int(pivot.loc[4, 0]), 4)
        self.assertEqual(int(pivot.loc[2, 1]), 4)

    def test_csv_exports(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            capacity_path = save_capacity_to_csv(self.results, tmpdir)
            raw_path = save_raw_records_to_csv(self.results, tmpdir)
            pivot_path = save_capacity_pivot(self.results, tmpdir)
            summary_path = save_status_summary(self.results, tmpdir)

            with open(capacity_path, newline="") as f:
                rows = list(csv.DictReader(f))
            self.assertEqual(len(rows), 6)
            self.assertEqual(rows[0]["board_size"], "2")

            with open(raw_path, newline="") as f:
                raw = list(csv.DictReader(f))
            self.assertEqual(len(raw), len(self.results["records"]))

            for path in (pivot_path, summary_path):
                self.assertGreater(Path(path).stat().st_size, 0)

    def test_plots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            heatmap, effort = plot_and_save(self.results, tmpdir)
            self.assertTrue(Path(heatmap).exists())
            self.assertEqual(len(effort), 2)
            for path in effort:
                self.assertTrue(Path(path).exists())


class StatsTests(unittest.TestCase):
    def test_detailed_statistics(self):
        summary = compute_detailed_statistics([1.0, 2.0, 3.0, 4.0])
        self.assertEqual(summary["count"], 4)
        self.assertEqual(summary["mean"], 2.5)
        self.assertEqual(summary["range"], 3.0)
        self.assertIsNone(compute_detailed_statistics([])["mean"])

    def test_summarize_by_status(self):
        records = [
            {"board_size": 4, "tolerance": 0, "target": 1, "status": "solved", "nodes": 2, "time": 0.1},
            {"board_size": 4, "tolerance": 0, "target": 5, "status": "unsatisfiable", "nodes": 10, "time": 0.3},
            {"board_size": 4, "tolerance": 0, "target": 2, "status": "solved", "nodes": 4, "time": 0.2},
        ]
        summary = summarize_by_status(records)
        self.assertEqual(set(summary), {"solved", "unsatisfiable"})
        self.assertEqual(summary["solved"]["nodes"]["mean"], 3.0)
        self.assertEqual(summary["unsatisfiable"]["time"]["count"], 1)


if __name__ == "__main__":
    unittest.main()
