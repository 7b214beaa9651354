"""Logging configuration for fieldtoc with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard logging levels
HEADINGS_LEVEL = 25  # Between INFO (20) and WARNING (30) - verbosity level 1
FIELDS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - verbosity level 2

logging.addLevelName(HEADINGS_LEVEL, "HEADINGS")
logging.addLevelName(FIELDS_LEVEL, "FIELDS")

VERBOSITY_SILENT = 0  # Only errors
VERBOSITY_HEADINGS = 1  # Show headings and rewrites
VERBOSITY_FIELDS = 2  # Show per-field decisions
VERBOSITY_DEBUG = 3  # Full debug output


class FieldTocLogger(logging.Logger):
    """Custom logger with semantic verbosity methods.

    - headings(): verbosity level 1 - headings added and rewrites recorded
    - fields(): verbosity level 2 - how each field value was handled
    - debug(): verbosity level 3 - everything else
    """

    def headings(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log heading discovery (verbosity level 1)."""
        if self.isEnabledFor(HEADINGS_LEVEL):
            self._log(HEADINGS_LEVEL, msg, args, **kwargs)

    def fields(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log field decisions (verbosity level 2)."""
        if self.isEnabledFor(FIELDS_LEVEL):
            self._log(FIELDS_LEVEL, msg, args, **kwargs)


def get_logger() -> FieldTocLogger:
    """Get the fieldtoc logger instance (singleton).

    Use setup_logger() to configure it before first use.
    """
    logging.setLoggerClass(FieldTocLogger)
    logger = logging.getLogger("fieldtoc")
    assert isinstance(logger, FieldTocLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the fieldtoc logger with a verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=silent (errors only), 1=headings, 2=fields, 3=debug
        stream: Optional output stream (defaults to sys.stderr, useful for testing)
    """
    logger = get_logger()

    logger.handlers.clear()

    level_map = {
        0: logging.ERROR,
        1: HEADINGS_LEVEL,
        2: FIELDS_LEVEL,
        3: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.ERROR))

    output_stream = stream if stream is not None else sys.stderr

    handler = logging.StreamHandler(output_stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to a clean state (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def headings_enabled() -> bool:
    """Check if headings-level logging is enabled (verbosity >= 1)."""
    return get_logger().isEnabledFor(HEADINGS_LEVEL)


def fields_enabled() -> bool:
    """Check if fields-level logging is enabled (verbosity >= 2)."""
    return get_logger().isEnabledFor(FIELDS_LEVEL)
