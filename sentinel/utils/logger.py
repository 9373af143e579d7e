"""
Logger Utility for Sentinel
Provides consistent logging configuration for the CLI and the engine
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(verbosity: int = 1,
                 log_file: Optional[str] = None,
                 logger_name: str = "sentinel",
                 console: Optional[Console] = None) -> logging.Logger:
    """Set up logger with rich console output and an optional log file.

    verbosity: 0 = warnings only, 1 = info, 2 = debug
    """
    logger = logging.getLogger(logger_name)
    level = logging.DEBUG if verbosity >= 2 else logging.INFO if verbosity == 1 else logging.WARNING
    logger.setLevel(logging.DEBUG if log_file else level)

    # Clear existing handlers
    logger.handlers.clear()
    logger.propagate = False

    # Console handler with rich formatting
    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=(verbosity >= 2),
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)

        # Detailed format for file
        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    # Suppress overly verbose third-party loggers unless in debug
    for name in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING if verbosity < 2 else logging.INFO)

    return logger
