"""Shared test fixtures for chartcore."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from chartcore.types import Candle
from tests.factories import make_candles


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo global logging configuration made by a test (CLI, setup_logging)."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)


@pytest.fixture
def linear_candles() -> list[Candle]:
    """Closes 1..10, one candle per minute."""
    return make_candles([float(v) for v in range(1, 11)])
