import logging
import sys

from PySide6.QtWidgets import QApplication

from tasklist.config import Settings
from tasklist.logging_setup import setup_logging
from tasklist.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def main():
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_dir)
    app = QApplication(sys.argv)
    app.setApplicationName(settings.app_name)
    win = MainWindow(settings=settings)
    win.resize(settings.window_width, settings.window_height)
    win.show()
    logger.info("Started with %d task(s)", len(win.store))
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
