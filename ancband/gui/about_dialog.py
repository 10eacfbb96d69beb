import platform
import matplotlib
import numpy as np
import pydantic
import PySide6
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QFormLayout, QLabel, QVBoxLayout

from ..constants import APP_NAME, APP_VERSION

ABOUT_TEXT = (
    "<p><b>{name}</b> {version}</p>"
    "<p>Compares two REW frequency response exports taken before and after "
    "active noise cancellation and reports the level reduction inside a "
    "band selected on the chart.</p>"
    "<p>MIT License</p>"
)

def component_versions() -> list[tuple[str, str]]:
    """Runtime versions listed in the About box."""
    return [
        ("Python", platform.python_version()),
        ("PySide6 (Qt)", PySide6.__version__),
        ("Matplotlib", matplotlib.__version__),
        ("NumPy", np.__version__),
        ("Pydantic", pydantic.VERSION),
    ]

class AboutDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"About {APP_NAME}")
        self.setMinimumWidth(340)

        layout = QVBoxLayout(self)

        lbl_about = QLabel(ABOUT_TEXT.format(name=APP_NAME, version=APP_VERSION))
        lbl_about.setWordWrap(True)
        layout.addWidget(lbl_about)

        versions = QFormLayout()
        for component, version in component_versions():
            lbl_version = QLabel(version)
            lbl_version.setStyleSheet("color: #555;")
            versions.addRow(f"{component}:", lbl_version)
        layout.addLayout(versions)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)
