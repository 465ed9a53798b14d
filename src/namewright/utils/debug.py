"""Logging setup for the namewright CLI.

Library modules log through ``logging.getLogger(__name__)`` and never touch
handlers. The CLI calls :func:`setup_logger` once to attach a stream handler
to the ``namewright`` logger they all share. ``NAMEWRIGHT_DEBUG=1`` or
``--verbose`` turns on DEBUG output.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("NAMEWRIGHT_DEBUG", "0") == "1"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(message)s"

_logger: Optional[logging.Logger] = None


def setup_logger(verbose: bool = False) -> logging.Logger:
    global _logger
    if _logger is None:
        logger = logging.getLogger("namewright")
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
            logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
        _logger = logger
    if verbose:
        _logger.setLevel(logging.DEBUG)
    return _logger


def debug(msg: str) -> None:
    """Log a CLI debug message; shown only once DEBUG output is enabled."""
    logging.getLogger("namewright.cli").debug(msg)
