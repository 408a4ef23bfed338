"""Logging configuration for the application."""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


__all__ = ["get_logger", "setup_logging"]

_initialized: bool = False


def setup_logging(
    level: int = logging.INFO,
    log_dir: Path | None = None,
    log_to_file: bool = True,
) -> None:
    """
    Configure logging once per process: Rich on stderr, plus a DEBUG log file.

    Args:
        level: Console logging level (default: INFO)
        log_dir: Directory for log files
        log_to_file: Whether to write logs to file
    """
    global _initialized  # noqa: PLW0603
    if _initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_to_file and log_dir else level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_to_file and log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"njs_{datetime.now():%Y%m%d_%H%M%S}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Playwright and asyncio are chatty at DEBUG.
    for name in ("playwright", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass `__name__`)."""
    return logging.getLogger(name)
