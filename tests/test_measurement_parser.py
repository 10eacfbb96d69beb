import unittest
import tempfile
import sys
import os
from pathlib import Path

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.measurement_parser import parse_measurement_text, load_measurement_file
from ancband.models import Sample

class TestMeasurementParser(unittest.TestCase):

    def test_rew_export_with_header(self):
        print("\n--- Testing Parser: REW header and data line ---")
        text = "* Measurement data\n20.00, 65.4, 0.0\n"
        self.assertEqual(parse_measurement_text(text), (Sample(20.0, 65.4),))

    def test_header_lines_rejected(self):
        text = "Freq(Hz) SPL(dB) Phase(degrees)\nabc, 65.4\n# comment\n100 70\n"
        self.assertEqual(parse_measurement_text(text), (Sample(100.0, 70.0),))

    def test_sorted_by_frequency(self):
        text = "1000 60\n20 80\n200 70\n"
        series = parse_measurement_text(text)
        self.assertEqual([s.frequency for s in series], [20.0, 200.0, 1000.0])

    def test_duplicate_frequencies_keep_file_order(self):
        text = "100 1\n50 9\n100 2\n"
        series = parse_measurement_text(text)
        self.assertEqual(series, (Sample(50.0, 9.0), Sample(100.0, 1.0), Sample(100.0, 2.0)))

    def test_non_positive_frequency_skipped(self):
        text = "0 50\n0.0, 51\n10 60\n"
        self.assertEqual(parse_measurement_text(text), (Sample(10.0, 60.0),))

    def test_negative_frequency_skipped(self):
        # Leading '-' is not a digit, the line never reaches the number parser
        self.assertEqual(parse_measurement_text("-10 60\n"), ())

    def test_non_numeric_level_skipped(self):
        text = "100 abc\n200 nan\n300 inf\n400 55.5\n"
        self.assertEqual(parse_measurement_text(text), (Sample(400.0, 55.5),))

    def test_single_field_skipped(self):
        self.assertEqual(parse_measurement_text("100\n"), ())

    def test_mixed_delimiters(self):
        text = "100,\t60.5\n200  ,  61.5,  12.0\n300\t62.5\t-4\n"
        series = parse_measurement_text(text)
        self.assertEqual([s.level for s in series], [60.5, 61.5, 62.5])

    def test_windows_line_endings(self):
        text = "* header\r\n100 60\r\n200 61\r\n"
        self.assertEqual(len(parse_measurement_text(text)), 2)

    def test_comments_only(self):
        text = "* Data saved by REW\n* Source: Line in\n\n   \n"
        self.assertEqual(parse_measurement_text(text), ())

    def test_empty_input(self):
        self.assertEqual(parse_measurement_text(""), ())

    def test_digit_leading_header_is_parsed_if_numeric(self):
        # Only the first character is inspected before numeric parsing
        self.assertEqual(parse_measurement_text("2nd pass 60\n"), ())
        self.assertEqual(parse_measurement_text("1e3 60\n"), (Sample(1000.0, 60.0),))

    def test_load_measurement_file(self):
        print("\n--- Testing Parser: load from file ---")
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "before.txt"
            path.write_text("* REW\n100 70\n50, 72\n", encoding="utf-8")
            measurement = load_measurement_file(path)

        self.assertEqual(measurement.name, "before.txt")
        self.assertEqual(len(measurement), 2)
        self.assertEqual(measurement.series[0], Sample(50.0, 72.0))

    def test_load_missing_file_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                load_measurement_file(Path(tmp) / "missing.txt")

if __name__ == '__main__':
    unittest.main()
