"""
Project: Cafe POS
Date: October 2026

Description:
Centralized logging configuration shared by the server and the client
data layer. All modules log through `logging.getLogger(__name__)`.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("engineio", "socketio", "engineio.server", "socketio.server", "httpx", "werkzeug")


def setup_logging(level="INFO", log_file=None):
    """
    Configures the root logger.

    Args:
        level (str | int): Log level for the application loggers.
        log_file (str | None): Optional file to mirror the console output into.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
