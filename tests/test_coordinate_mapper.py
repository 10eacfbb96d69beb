import unittest
import numpy as np
import sys
import os

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.coordinate_mapper import (freq_to_x, x_to_freq, clamp_x, db_to_y, y_to_db,
                                       level_axis_bounds, level_grid, format_frequency_tick,
                                       frequency_grid, series_to_points)
from ancband.models import Sample

class TestCoordinateMapper(unittest.TestCase):

    def setUp(self):
        self.width = 800.0
        self.height = 400.0

    def test_frequency_domain_edges(self):
        print("\n--- Testing Mapper: 20 Hz / 20 kHz edges ---")
        self.assertAlmostEqual(freq_to_x(20.0, self.width), 0.0)
        self.assertAlmostEqual(freq_to_x(20000.0, self.width), self.width)
        self.assertAlmostEqual(x_to_freq(0.0, self.width), 20.0)
        self.assertAlmostEqual(x_to_freq(self.width, self.width), 20000.0, places=6)

    def test_one_decade_spans_a_third(self):
        self.assertAlmostEqual(freq_to_x(200.0, self.width), self.width / 3)

    def test_below_domain_pinned_left(self):
        self.assertEqual(freq_to_x(5.0, self.width), 0.0)
        self.assertEqual(freq_to_x(0.0, self.width), 0.0)

    def test_frequency_round_trip(self):
        for f in [20.0, 31.5, 200.0, 997.0, 12345.6, 20000.0]:
            back = x_to_freq(freq_to_x(f, self.width), self.width)
            self.assertLess(abs(back - f) / f, 1e-6)

    def test_x_round_trip(self):
        for x in [0.0, 1.0, 123.4, 400.0, 799.9]:
            self.assertAlmostEqual(freq_to_x(x_to_freq(x, self.width), self.width), x, places=6)

    def test_clamp_x(self):
        self.assertEqual(clamp_x(-15.0, self.width), 0.0)
        self.assertEqual(clamp_x(900.0, self.width), self.width)
        self.assertEqual(clamp_x(321.0, self.width), 321.0)

    def test_level_axis(self):
        print("\n--- Testing Mapper: level axis ---")
        self.assertAlmostEqual(db_to_y(110.0, self.height, 30.0, 110.0), 0.0)
        self.assertAlmostEqual(db_to_y(30.0, self.height, 30.0, 110.0), self.height)
        self.assertAlmostEqual(db_to_y(70.0, self.height, 30.0, 110.0), self.height / 2)
        self.assertAlmostEqual(y_to_db(db_to_y(63.2, self.height, 30, 110), self.height, 30, 110), 63.2)

    def test_level_axis_vectorised(self):
        ys = db_to_y(np.array([-30.0, 0.0, 10.0]), 100.0, -30.0, 10.0)
        np.testing.assert_allclose(ys, [100.0, 25.0, 0.0])

    def test_level_axis_bounds(self):
        self.assertEqual(level_axis_bounds([43.0, 60.0, 87.0]), (35.0, 95.0))
        self.assertEqual(level_axis_bounds([50.0, 80.0]), (45.0, 85.0))
        self.assertEqual(level_axis_bounds([]), (0.0, 100.0))

    def test_level_grid(self):
        self.assertEqual(level_grid(35.0, 95.0), [35.0, 45.0, 55.0, 65.0, 75.0, 85.0, 95.0])

    def test_frequency_ticks(self):
        self.assertEqual(format_frequency_tick(20), "20")
        self.assertEqual(format_frequency_tick(1000), "1k")
        self.assertEqual(format_frequency_tick(20000), "20k")
        labels = [label for _, label in frequency_grid(self.width)]
        self.assertEqual(labels, ["20", "50", "100", "200", "500", "1k", "2k", "5k", "10k", "20k"])

    def test_series_to_points(self):
        series = (Sample(20.0, 110.0), Sample(20000.0, 30.0))
        xs, ys = series_to_points(series, self.width, self.height, 30.0, 110.0)
        np.testing.assert_allclose(xs, [0.0, self.width], atol=1e-9)
        np.testing.assert_allclose(ys, [0.0, self.height], atol=1e-9)

        xs, ys = series_to_points((), self.width, self.height, 30.0, 110.0)
        self.assertEqual(xs.size, 0)
        self.assertEqual(ys.size, 0)

if __name__ == '__main__':
    unittest.main()
