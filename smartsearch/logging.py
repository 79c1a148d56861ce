"""Stdout logging for the search hosts."""

from __future__ import annotations

import logging
import sys
import time
from typing import Union


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Route all records to one stdout handler with UTC timestamps.

    ``level`` accepts a logging constant or its name (``"DEBUG"``), so it can
    come straight from settings. Calling it again replaces the handler.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%SZ"
    )
    formatter.converter = time.gmtime
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]
