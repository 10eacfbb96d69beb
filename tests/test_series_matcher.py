import unittest
import sys
import os

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.series_matcher import build_difference, nearest_sample
from ancband.models import Sample, DifferenceSample

def make_series(pairs):
    return tuple(Sample(f, l) for f, l in pairs)

class TestSeriesMatcher(unittest.TestCase):

    def test_identical_grids(self):
        print("\n--- Testing Matcher: identical frequency grids ---")
        before = make_series([(100, 70.0), (200, 68.0), (400, 60.0)])
        after = make_series([(100, 71.5), (200, 55.0), (400, 60.0)])
        diffs = build_difference(before, after)
        self.assertEqual(diffs, [
            DifferenceSample(100, 1.5),
            DifferenceSample(200, -13.0),
            DifferenceSample(400, 0.0),
        ])

    def test_nearby_grid_within_tolerance(self):
        before = make_series([(100, 70.0), (1000, 60.0)])
        after = make_series([(102, 65.0), (1030, 50.0)])
        diffs = build_difference(before, after)
        self.assertEqual([d.frequency for d in diffs], [100, 1000])
        self.assertEqual([d.diff for d in diffs], [-5.0, -10.0])

    def test_outside_tolerance_excluded(self):
        print("\n--- Testing Matcher: tolerance exclusion ---")
        # 100 Hz: nearest after is 106 Hz, 6 Hz >= 5% of 100 Hz
        before = make_series([(100, 70.0), (200, 68.0)])
        after = make_series([(106, 60.0), (201, 60.0)])
        diffs = build_difference(before, after)
        self.assertEqual(diffs, [DifferenceSample(200, -8.0)])

    def test_tolerance_boundary_is_exclusive(self):
        before = make_series([(100, 70.0)])
        after = make_series([(105, 60.0)])
        self.assertEqual(build_difference(before, after, 0.05), [])
        self.assertEqual(len(build_difference(before, after, 0.06)), 1)

    def test_sparse_after_series(self):
        before = make_series([(100, 70.0), (150, 70.0), (200, 70.0), (300, 70.0)])
        after = make_series([(101, 60.0), (299, 65.0)])
        diffs = build_difference(before, after)
        self.assertEqual([d.frequency for d in diffs], [100, 300])
        self.assertEqual([d.diff for d in diffs], [-10.0, -5.0])

    def test_output_never_longer_than_before(self):
        before = make_series([(100, 1.0), (200, 1.0)])
        after = make_series([(f, 0.0) for f in range(90, 220, 2)])
        self.assertLessEqual(len(build_difference(before, after)), len(before))

    def test_empty_inputs(self):
        series = make_series([(100, 70.0)])
        self.assertEqual(build_difference((), series), [])
        self.assertEqual(build_difference(series, ()), [])
        self.assertEqual(build_difference((), ()), [])

    def test_nearest_sample(self):
        series = make_series([(100, 1.0), (200, 2.0), (400, 3.0)])
        self.assertEqual(nearest_sample(series, 180), Sample(200, 2.0))
        self.assertEqual(nearest_sample(series, 10), Sample(100, 1.0))
        self.assertEqual(nearest_sample(series, 5000), Sample(400, 3.0))

    def test_nearest_sample_tie_takes_first(self):
        series = make_series([(100, 1.0), (200, 2.0)])
        self.assertEqual(nearest_sample(series, 150), Sample(100, 1.0))

    def test_nearest_sample_empty(self):
        self.assertIsNone(nearest_sample((), 100))

if __name__ == '__main__':
    unittest.main()
