"""Tests for plasmodium.utils."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from plasmodium.utils import setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_single_handler_after_repeat_calls(
    restore_root_logger: logging.Logger,
) -> None:
    setup_logging("debug")
    setup_logging("DEBUG")
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.DEBUG


def test_unknown_level(restore_root_logger: logging.Logger) -> None:
    with pytest.raises(ValueError, match="unknown log level"):
        setup_logging("chatty")
