import logging
import sys
from PySide6.QtWidgets import QApplication

from .constants import APP_NAME, APP_VERSION
from .gui.main_window import MainWindow
from .settings_manager import SettingsManager

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

def configure_logging(level_name: str = "INFO"):
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S")

def main() -> int:
    configure_logging(SettingsManager().load().log_level)
    logging.getLogger(__name__).info("Starting %s %s", APP_NAME, APP_VERSION)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    # Clean fusion style for Windows/Linux consistency
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
