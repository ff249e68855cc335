from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lapwatch.core.clock import ManualClock
from lapwatch.core.registry import StopwatchRegistry
from lapwatch.utils.logging import logger


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start_ns=1_000_000_000)


@pytest.fixture
def registry(clock: ManualClock) -> StopwatchRegistry:
    return StopwatchRegistry(clock)
