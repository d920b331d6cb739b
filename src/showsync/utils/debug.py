"""Logging setup for the showsync command line.

Library modules log through ``logging.getLogger(__name__)``; this module
attaches the one console handler they all end up at. Debug output is
controlled by the SHOWSYNC_DEBUG environment variable.
"""

import logging
import os
from typing import Optional

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    return os.getenv("SHOWSYNC_DEBUG", "0") == "1"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure and return the ``showsync`` logger.

    Safe to call more than once; the handler is only attached the first time.

    Args:
        verbose: Force DEBUG level regardless of SHOWSYNC_DEBUG.
    """
    global _logger
    logger = logging.getLogger("showsync")
    if _logger is None and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose or debug_enabled() else logging.INFO)
    _logger = logger
    return logger
