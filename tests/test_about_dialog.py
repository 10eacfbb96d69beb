import unittest
import sys
import os

# Path Hack
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ancband.gui.about_dialog import component_versions

class TestAboutDialog(unittest.TestCase):

    def test_component_versions(self):
        versions = dict(component_versions())
        self.assertEqual(list(versions), ["Python", "PySide6 (Qt)", "Matplotlib", "NumPy", "Pydantic"])
        for version in versions.values():
            self.assertTrue(version)

if __name__ == '__main__':
    unittest.main()
