"""Logging configuration.

stdout carries the MCP stdio transport, so console logs go to stderr.
"""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Log level for the console and file handlers.
        log_file: Optional file that receives a plain-text copy of all logs.
    """
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    ]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    # Keep library chatter out of tool output logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("websockets").setLevel(logging.WARNING)


def setup_logging_from_env(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure logging from SHELLBRIDGE_LOG_LEVEL (default INFO)."""
    level = "DEBUG" if verbose else os.environ.get("SHELLBRIDGE_LOG_LEVEL", "INFO").upper()
    setup_logging(level, log_file)
