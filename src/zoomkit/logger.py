"""
Logging configuration for zoomkit
"""

import logging
import re
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
NOISY_LOGGERS = ("requests", "urllib3")

_SECRET_PATTERN = re.compile(r"\b(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+")


class RedactingFilter(logging.Filter):
    """Mask Authorization header values that end up in log messages"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SECRET_PATTERN.sub(r"\1 [REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging(level: str = "INFO", verbose: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure logging for zoomkit

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        verbose: Force DEBUG level
        stream: Destination stream (defaults to stderr)
    """
    if verbose:
        level = "DEBUG"
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(RedactingFilter())
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
