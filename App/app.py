"""Spiral Portrait Generator - Main entry point."""

import os
import sys

from loguru import logger
from PyQt6.QtWidgets import QApplication

from ui.main_window import SpiralPortraitWindow

LOG_LEVEL_ENV = "SPIRAL_LOG_LEVEL"


def configure_logging():
    """Send log output to stderr at the level set in the environment."""
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get(LOG_LEVEL_ENV, "INFO").upper())


def main():
    """Launch the spiral portrait application."""
    configure_logging()

    app = QApplication(sys.argv)

    app.setApplicationDisplayName("Spiral Portrait")
    app.setApplicationName("SpiralPortrait")

    window = SpiralPortraitWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
