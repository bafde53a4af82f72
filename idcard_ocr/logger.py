"""
Centralized logging configuration.

Every module asks for its logger here so that console and file output
look the same across the parser, the OCR step and the CLI.

- Console: Rich output on a terminal, plain lines when piped; INFO, or
  DEBUG when DEBUG=1
- File (LOG_TO_FILE=1): one timestamped DEBUG log per run under LOG_DIR

Usage:
    from idcard_ocr.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Parsing front side of ID card")
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import get_config

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"

# Shared by every logger writing to file in this process
_run_stamp = f"{datetime.now():%Y%m%d_%H%M%S}"


def _console_handler(level: int) -> logging.Handler:
    if sys.stdout.isatty():
        handler: logging.Handler = RichHandler(rich_tracebacks=True, show_path=False)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    handler.setLevel(level)
    return handler


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / f"{_run_stamp}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logger(
    name: str = "idcard_ocr",
    log_dir: Optional[Path] = None,
    debug: Optional[bool] = None,
    log_to_file: Optional[bool] = None,
) -> logging.Logger:
    """
    Attach handlers to a named logger (once).

    Args:
        name: Logger name (typically __name__)
        log_dir: Directory for log files (default: Config.logs_dir)
        debug: Console at DEBUG instead of INFO (default: Config.debug)
        log_to_file: Also write a DEBUG log file (default: Config.log_to_file)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    config = get_config()
    debug = config.debug if debug is None else debug
    log_to_file = config.log_to_file if log_to_file is None else log_to_file

    # Handlers filter; the logger itself passes everything
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(_console_handler(logging.DEBUG if debug else logging.INFO))

    if log_to_file:
        logger.addHandler(_file_handler(log_dir or config.logs_dir))

    return logger


_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str = "idcard_ocr") -> logging.Logger:
    """Return the configured logger for `name`, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = setup_logger(name)
    return _loggers[name]
