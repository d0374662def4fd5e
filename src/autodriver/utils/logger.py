"""
Logging configuration for Auto Driver Installer
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from autodriver import config

LOGGER_NAME = "autodriver"


def setup_logger(name=LOGGER_NAME, log_file: Optional[Path] = None, level: Optional[str] = None):
    """
    Setup application logger with file and console handlers

    Args:
        name: Logger name
        log_file: Append-only log file (defaults to config.LOG_FILE)
        level: Console level name (defaults to config.LOG_LEVEL)

    Returns:
        logging.Logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_file = Path(log_file) if log_file else config.LOG_FILE
    console_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)

    # Create formatters
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # File handler
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not create log file: {e}", file=sys.stderr)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    return logger


# Shared logger; handlers are attached by setup_logger() from the entry point
logger = logging.getLogger(LOGGER_NAME)
