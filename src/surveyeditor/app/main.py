"""
Run with: python -m surveyeditor
"""
from __future__ import annotations

import logging
import sys

import pyqtgraph as pg

from surveyeditor.app.application import create_app
from surveyeditor.app.ui.main_window import MainWindow
from surveyeditor.logging_config import install_qt_message_handler, setup_logging

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")


def main() -> int:
    """Main entry point for the application."""
    setup_logging(level=logging.INFO)
    install_qt_message_handler()
    app = create_app()
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
