"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from dateformat.core.engine import DateFormatter
from dateformat.core.tokens import TokenTable
from dateformat.types.instant import Instant

# Monday 2024-01-15 03:04:05 UTC
REFERENCE_EPOCH_MS = 1_705_287_845_000


@pytest.fixture
def reference_instant() -> Instant:
    """Fixed instant used for token reference values."""
    return Instant.from_epoch_ms(REFERENCE_EPOCH_MS)


@pytest.fixture
def fixed_now(reference_instant: Instant) -> Instant:
    """The "current time" seen by engines built with the engine fixture."""
    return reference_instant


@pytest.fixture
def engine(fixed_now: Instant) -> DateFormatter:
    """Engine with a frozen clock and default tables."""
    return DateFormatter(clock=lambda: fixed_now)


@pytest.fixture
def token_table() -> TokenTable:
    return TokenTable()


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after configure_logging runs."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield root_logger
    finally:
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
