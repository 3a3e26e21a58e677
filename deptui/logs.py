"""Logging configuration.

Call configure_logging() once at startup. While the TUI owns the terminal,
records must go to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: int = logging.WARNING, log_file: Path | None = None) -> None:
    """Configure the root logger with a single stderr or file handler."""
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
        force=True,
    )
    # Textual logs through its own devtools channel
    logging.getLogger("asyncio").setLevel(logging.WARNING)
