"""
Console logging with the installer's status markers.
"""

from __future__ import annotations

import logging
import sys

BLUE = "\033[0;34m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
RED = "\033[0;31m"
RESET = "\033[0m"

_MARKERS = {
    logging.DEBUG: ("·", ""),
    logging.INFO: ("✓", GREEN),
    logging.WARNING: ("⚠", YELLOW),
    logging.ERROR: ("✗", RED),
    logging.CRITICAL: ("✗", RED),
}


class StatusFormatter(logging.Formatter):
    """Prefix each message with a status marker; step headers go in blue."""

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    def _paint(self, text: str, color: str) -> str:
        if not self.color or not color:
            return text
        return f"{color}{text}{RESET}"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if getattr(record, "step", False):
            return "\n" + self._paint(message, BLUE)

        marker, color = _MARKERS.get(record.levelno, ("", ""))
        line = f"{self._paint(marker, color)} {message}"
        if record.exc_info and record.exc_info[0]:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = "INFO", color: bool = True) -> None:
    """Route ``agentkit`` logs to stdout through a single status handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StatusFormatter(color=color))

    logger = logging.getLogger("agentkit")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()
    logger.addHandler(handler)
