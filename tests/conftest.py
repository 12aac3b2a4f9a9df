"""
soundstage Test Fixtures — Shared infrastructure for engine tests.

Provides:
    - Recording audio output
    - Registries that log into a buffer instead of stderr
    - Common scene values
"""

from __future__ import annotations

import io
import math

import pytest

from soundstage.config import AudioParameterOptions
from soundstage.monitoring import logging as slog
from soundstage.monitoring.logging import LogLevel, StructuredLogger
from soundstage.runtime.registry import SourceRegistry
from soundstage.spatial.geometry import Position, Wall
from soundstage.spatial.hearing import Listener
from soundstage.spatial.parameters import SourceConfig
from soundstage.testing.mock import MockAudioOutput


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "property: hypothesis property-based tests")


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def quiet_logger(log_stream) -> StructuredLogger:
    return StructuredLogger(name="test", level=LogLevel.DEBUG, output=log_stream)


@pytest.fixture
def mock_output() -> MockAudioOutput:
    return MockAudioOutput()


@pytest.fixture
def registry(mock_output, quiet_logger) -> SourceRegistry:
    return SourceRegistry(output=mock_output, structured_logger=quiet_logger)


@pytest.fixture
def origin_listener() -> Listener:
    """Listener at the origin facing +x."""
    return Listener(position=Position(0, 0), facing=0.0)


@pytest.fixture
def facing_source() -> SourceConfig:
    """Cardioid source two units ahead of the origin, facing back at it."""
    return SourceConfig(
        id="speaker-1",
        position=Position(2, 0),
        facing=math.pi,
        directivity="cardioid",
    )


@pytest.fixture
def crossing_wall() -> Wall:
    """Wall crossing the path between the origin and (2, 0)."""
    return Wall(Position(1, -2), Position(1, 2))


@pytest.fixture
def scenario_options() -> AudioParameterOptions:
    return AudioParameterOptions(distance_model="inverse", master_volume=1.0, max_distance=5.0)


@pytest.fixture
def reset_global_logger():
    """Run with no global structured logger, restoring the previous one after."""
    saved = slog._global_logger
    slog._global_logger = None
    yield
    slog._global_logger = saved
