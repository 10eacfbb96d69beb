import unittest
import tempfile
import sys
import os
from pathlib import Path
from pydantic import ValidationError

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.settings_manager import AppSettings, SettingsManager

class TestSettingsManager(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "settings.yaml"
        self.mgr = SettingsManager(default_path=self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_defaults_when_missing(self):
        settings = self.mgr.load()
        self.assertEqual(settings.default_range_start, 200.0)
        self.assertEqual(settings.default_range_end, 1000.0)
        self.assertEqual(settings.min_separation_hz, 10.0)
        self.assertEqual(settings.match_tolerance_ratio, 0.05)

    def test_round_trip(self):
        print("\n--- Testing Settings: YAML round trip ---")
        settings = AppSettings(default_range_start=100.0, default_range_end=500.0,
                               plot_autoscale=False, plot_ymin=20.0, plot_ymax=90.0)
        self.assertTrue(self.mgr.save(settings))
        self.assertTrue(self.path.read_text().startswith("# Saved by"))
        self.assertEqual(self.mgr.load(), settings)

    def test_invalid_file_gives_defaults(self):
        self.path.write_text("default_range_start: [unclosed\n")
        self.assertEqual(self.mgr.load(), AppSettings())

    def test_invalid_values_give_defaults(self):
        self.path.write_text("default_range_start: 2000\ndefault_range_end: 100\n")
        self.assertEqual(self.mgr.load(), AppSettings())

    def test_explicit_invalid_file_gives_none(self):
        bad = Path(self.tmp.name) / "bad.yaml"
        bad.write_text("plot_ymin: [unclosed\n")
        self.assertIsNone(self.mgr.load(bad))
        self.assertIsNone(self.mgr.load(Path(self.tmp.name) / "missing.yaml"))

    def test_unknown_keys_ignored(self):
        self.path.write_text("some_old_key: 1\nmin_separation_hz: 25\n")
        self.assertEqual(self.mgr.load().min_separation_hz, 25.0)

    def test_validator(self):
        with self.assertRaises(ValidationError):
            AppSettings(plot_ymin=100.0, plot_ymax=50.0)
        with self.assertRaises(ValidationError):
            AppSettings(match_tolerance_ratio=0.0)
        with self.assertRaises(ValidationError):
            AppSettings(diff_min_db=10.0, diff_max_db=-30.0)

    def test_save_to_unwritable_path(self):
        bad = Path(self.tmp.name) / "missing_dir" / "settings.yaml"
        self.assertFalse(self.mgr.save(AppSettings(), bad))

if __name__ == '__main__':
    unittest.main()
