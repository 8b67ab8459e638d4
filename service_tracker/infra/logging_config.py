"""
Logging configuration for the command-line entry point.

Library modules only create module loggers; the root logger is configured
here, once.
"""

import logging
from pathlib import Path
from typing import Optional


def setup_logging(level: str = "INFO", logfile: Optional[Path] = None) -> None:
    """
    Configure the root logger with a console handler and an optional file handler.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO"), case insensitive
        logfile: Optional file to log to as well
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (tests, repeated calls)
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
