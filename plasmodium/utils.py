"""Helpers shared by the entry points that do not belong to the model."""

from __future__ import annotations

import logging

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "INFO", fmt: str = _DEFAULT_FORMAT) -> None:
    """Configure the root logger with a single console handler.

    Existing root handlers are removed first so repeated calls do not
    duplicate output.

    Args:
        level: Level name (``"DEBUG"``, ``"info"``...) or number.
        fmt: ``logging.Formatter`` format string.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    if isinstance(level, str):
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"unknown log level: {level}"
            raise ValueError(msg)

    root = logging.getLogger()
    root.setLevel(level)
    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    logging.getLogger(__name__).debug("Logging configured at %s", level)
