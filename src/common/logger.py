"""Logging utilities with rich console output.

Pipeline modules log through stdlib loggers that carry a rich handler, so
warnings (unreadable files, degraded oracle calls) show up inline while the
run is in progress.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Analyzing src/app.py...")
    logger.warning("Could not read untracked file notes.bin")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Logs go to stderr; stdout is reserved for report output such as --format json
console = Console(stderr=True)


def _rich_handler() -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler())

    # Keep propagation so pytest's caplog sees the records
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging once at the CLI entry point.

    Sets the level on the root logger and on every logger already handed out
    by get_logger, so a --log-level flag takes effect for modules imported
    before the CLI parsed its arguments.

    Args:
        level: Logging level for the whole application
        log_file: Optional file path to also log to a file
    """
    level = level.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and any(
            isinstance(h, RichHandler) for h in logger.handlers
        ):
            logger.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)
