"""Universal debug/logging utility for ShelfScan.

Provides debug(), info(), warn(), error() functions for consistent logging.
Debug output is controlled by the SHELFSCAN_DEBUG environment variable.
Log records go to stderr so they never mix with the report on stdout.
"""

import logging
import os
from typing import Optional

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    """Check whether SHELFSCAN_DEBUG is switched on."""
    return os.getenv("SHELFSCAN_DEBUG", "0").lower() in {"1", "true", "yes"}


def setup_logger() -> logging.Logger:
    """Configure and return the package logger (idempotent)."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("shelfscan")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
    _logger = logger
    return logger


def debug(msg: str) -> None:
    """Log a debug message."""
    setup_logger().debug(msg)


def info(msg: str) -> None:
    """Log an info message."""
    setup_logger().info(msg)


def warn(msg: str) -> None:
    """Log a warning message."""
    setup_logger().warning(msg)


def error(msg: str) -> None:
    """Log an error message."""
    setup_logger().error(msg)
