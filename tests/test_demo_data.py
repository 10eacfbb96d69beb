import unittest
import sys
import os

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.demo_data import generate_demo_series
from ancband.band_analyzer import analyze_band
from ancband.models import FrequencyRange

class TestDemoData(unittest.TestCase):

    def test_shape(self):
        print("\n--- Testing Demo Data: log-spaced grid ---")
        before, after = generate_demo_series(seed=1)
        self.assertEqual(len(before), len(after))
        self.assertAlmostEqual(before[0].frequency, 20.0)
        self.assertLessEqual(before[-1].frequency, 20000.0)
        self.assertGreater(before[-1].frequency, 19000.0)
        freqs = [s.frequency for s in before]
        self.assertEqual(freqs, sorted(freqs))
        self.assertEqual(freqs, [s.frequency for s in after])

    def test_reduction_only_inside_anc_band(self):
        before, after = generate_demo_series(seed=2)
        for b, a in zip(before, after):
            self.assertLessEqual(a.level, b.level)
            if b.frequency <= 100 or b.frequency >= 2000:
                self.assertEqual(a.level, b.level)

    def test_demo_band_shows_reduction(self):
        before, after = generate_demo_series(seed=3)
        result = analyze_band(before, after, FrequencyRange(200, 1000))
        self.assertLess(result.delta_db, -5.0)
        self.assertGreater(result.reduction_percent, 50.0)

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_demo_series(seed=7), generate_demo_series(seed=7))

if __name__ == '__main__':
    unittest.main()
