"""Logging configuration for chaindiag.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are attached here, on request of the application.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from rich.logging import RichHandler

from chaindiag.ui.console import VERSION, console

LOGGER_NAME = "chaindiag"


class JSONFormatter(logging.Formatter):
    """JSON log formatter, one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure the ``chaindiag`` logger.

    Args:
        log_file: Optional log file; a ``.json`` suffix selects JSON lines
        verbose: Also log to the console through a rich handler
        level: Logging level for the package logger and its handlers

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)

        if log_file.suffix == ".json":
            file_formatter: logging.Formatter = JSONFormatter()
        else:
            file_formatter = logging.Formatter(
                "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    if verbose:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_path=False,
            markup=False,
        )
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    logger.debug("chaindiag v%s | Python %s", VERSION, sys.version.split()[0])
    return logger


def close_logging() -> None:
    """Detach and close all handlers of the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


__all__ = ["JSONFormatter", "LOGGER_NAME", "close_logging", "setup_logging"]
