"""
Logging Configuration
Sets up the 'surveyeditor' logger and routes Qt's own diagnostics into it.
"""
import logging
import sys
from typing import Optional, Union

from PySide6.QtCore import QMessageLogContext, QtMsgType, qInstallMessageHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Third-party loggers that are chatty at DEBUG
QUIET_LOGGERS = ("h5py", "pyqtgraph", "PIL")

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

qt_logger = logging.getLogger("surveyeditor.qt")


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'surveyeditor' namespace.

    Args:
        level: Logging level, either a number (logging.DEBUG) or a name ("debug").
        log_file: Optional path to save logs to a file. The file is overwritten.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level '{name}'")

    logger = logging.getLogger("surveyeditor")
    logger.setLevel(level)

    # Re-running setup replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger


def qt_message_handler(mode: QtMsgType, context: Optional[QMessageLogContext], message: str) -> None:
    """Forward a Qt diagnostic (qWarning, qDebug, ...) to the 'surveyeditor.qt' logger."""
    category = getattr(context, "category", None)
    if category and category != "default":
        message = f"[{category}] {message}"
    qt_logger.log(_QT_LEVELS.get(mode, logging.WARNING), message)


def install_qt_message_handler() -> None:
    """Route Qt's messages through Python logging instead of stderr."""
    qInstallMessageHandler(qt_message_handler)
