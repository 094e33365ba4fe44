"""
Logging setup.

Modules either import the shared ``logger`` or create their own with
``setup_logger(__name__)``.
"""

import logging
import sys

from daybook.core.config import get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "daybook") -> logging.Logger:
    """Get a logger with a stream handler attached once."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    log.setLevel(get_settings().LOG_LEVEL.upper())
    return log


logger = setup_logger("daybook")
