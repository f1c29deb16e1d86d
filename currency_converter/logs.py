"""
logs.py — logging setup & unhandled-exception hooks
"""

import logging
import sys

from . import config

logger = logging.getLogger("currency_converter")


def configure_logging(level=None):
    logging.basicConfig(
        level=level or config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.excepthook = excepthook


def log_unhandled(exc_type, exc_value, exc_traceback):
    """Log an exception nobody caught; also used as Tk's report_callback_exception."""
    logger.error("Unhandled exception", exc_info=(exc_type, exc_value, exc_traceback))


def excepthook(exc_type, exc_value, exc_traceback):
    log_unhandled(exc_type, exc_value, exc_traceback)
    sys.__excepthook__(exc_type, exc_value, exc_traceback)
