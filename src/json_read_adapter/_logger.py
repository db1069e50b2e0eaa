"""Logging helpers for json_read_adapter."""

from __future__ import annotations

import logging
import os

_PREFIX = "json_read_adapter"


def get_logger(name: str) -> logging.Logger:
    """Returns a stdlib logger namespaced under ``json_read_adapter.``."""
    if not (name == _PREFIX or name.startswith(f"{_PREFIX}.")):
        name = f"{_PREFIX}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | int | None = None) -> None:
    """
    Configures root logging for command-line use.

    When ``level`` is None the ``LOG_LEVEL`` environment variable is
    consulted, falling back to WARNING.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
