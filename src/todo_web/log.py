from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s: %(message)s"


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the package logger and set its level.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("todo_web")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
