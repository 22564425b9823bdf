"""Test configuration and shared fixtures."""

from __future__ import annotations

import pytest

from docintel.core.domain.analysis import PollingPolicy
from tests.fakes import OPERATION_LOCATION


@pytest.fixture
def operation_location() -> str:
    return OPERATION_LOCATION


@pytest.fixture
def fast_polling() -> PollingPolicy:
    """Default attempt ceiling without waiting between polls."""
    return PollingPolicy(max_attempts=10, retry_delay=0)
