"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator

import pytest

from geofix.logger import logger
from tests.common import RecordingHandler


@pytest.fixture
def geofix_logs() -> Iterator[RecordingHandler]:
    """Capture `geofix` log records at DEBUG level.

    The `geofix` logger does not propagate to the root logger, so caplog
    cannot see it; a handler is attached directly instead.
    """
    handler = RecordingHandler()
    previous_level = logger.level
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)
