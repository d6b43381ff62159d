"""
Structured Logging Configuration

One line per record: UTC timestamp, level, logger name, message. The
console handler is colourised; the optional file handler gets the same
layout without ANSI codes. Level, file and colour come from
`mindcare.config.settings` and are applied when this module is imported.
"""
import logging
import sys
from typing import Optional
from datetime import datetime, timezone

from mindcare.config import settings


class StructuredFormatter(logging.Formatter):
    """`[timestamp] LEVEL    [logger] message`, optionally coloured by level."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        line = f"[{timestamp}] {record.levelname:8} [{record.name}] {record.getMessage()}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        if not self.use_color:
            return line
        return f"{self.COLORS.get(record.levelname, '')}{line}{self.RESET}"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_color: bool = True,
) -> None:
    """
    Replace the root logger's handlers with the service's own.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Unknown names mean INFO.
        log_file: Also append records to this file when set.
        use_color: Colour console output by level.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=use_color))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter(use_color=False))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Module logger; call as ``get_logger(__name__)``."""
    return logging.getLogger(name)


setup_logging(settings.log_level, settings.log_file, settings.log_color)
