"""Logging configuration utilities."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


ANSI_RESET = "\x1b[0m"
ANSI_COLORS = {
    logging.DEBUG: "\x1b[36m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[35m",
}


class ColorFormatter(logging.Formatter):
    """Formatter that adds ANSI colors to log levels."""

    def __init__(self, fmt: str, use_color: bool = True) -> None:
        super().__init__(fmt)
        self._use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with color if enabled.

        Args:
            record: The log record to format.

        Returns:
            The formatted log message.
        """
        original_levelname = record.levelname
        if self._use_color:
            color = ANSI_COLORS.get(record.levelno)
            if color:
                record.levelname = f"{color}{record.levelname}{ANSI_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def configure_logging(
    debug: bool = False,
    log_file: Optional[Path] = None,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """Configure logging to stderr and, optionally, a rotating file.

    Without ``debug`` only warnings reach the console, so command output
    stays clean for piping.

    Args:
        debug: Whether to enable debug-level logging.
        log_file: Optional file to also write logs to.
        max_bytes: Maximum size of the log file before rotation.
        backup_count: Number of rotated files to keep.
        stream: Console stream (default: stderr).

    Returns:
        The path to the active log file, if any.
    """
    log_level = logging.DEBUG if debug else logging.WARNING

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_supports_color = False
    if hasattr(stream_handler.stream, "isatty"):
        stream_supports_color = stream_handler.stream.isatty()
    stream_handler.setFormatter(
        ColorFormatter(LOG_FORMAT, use_color=stream_supports_color)
    )
    stream_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(stream_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    else:
        root_logger.setLevel(log_level)

    # Suppress noisy libraries
    logging.getLogger("pyperclip").setLevel(logging.WARNING)

    return log_file
