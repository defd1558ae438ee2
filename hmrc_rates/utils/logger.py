"""Logging utilities for the hmrc_rates package."""

from __future__ import annotations

import logging
from typing import Optional

_CONFIGURED: bool = False
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = "hmrc_rates") -> logging.Logger:
    """Return a package logger, configuring the root handler on first use."""
    global _CONFIGURED
    if not _CONFIGURED:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        _CONFIGURED = True
    return logging.getLogger(name)


def set_verbosity(level: Optional[int | str]) -> None:
    """Adjust the level of the ``hmrc_rates`` logger tree (used by the CLI)."""

    if level is None:
        return
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    get_logger().setLevel(level)
