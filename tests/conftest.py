"""Wspólne fixture'y testów."""

from __future__ import annotations

import pytest
import structlog

from tests.synthetic_data import RecordingSink


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
