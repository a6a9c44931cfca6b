"""Define shared test fixtures and register the fixture modules under `tests/fixtures/`."""

import pytest

from strips_planning.io import BufferSink, PlannerConfig

pytest_plugins = ["fixtures.planning_fixtures"]


@pytest.fixture
def buffer_sink() -> BufferSink:
    """Return an output sink collecting diagnostics in memory."""
    return BufferSink()


@pytest.fixture
def config(buffer_sink: BufferSink) -> PlannerConfig:
    """Return the default planner configuration, writing to an in-memory sink."""
    return PlannerConfig(sink=buffer_sink)
