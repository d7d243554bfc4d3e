"""Shared fixtures for the test suite."""

import os
from datetime import datetime
from unittest.mock import patch

import pytest
from helpers import at

from mbta_departures.adapters.config import AppConfig
from mbta_departures.domain.models import StopDescriptor


@pytest.fixture
def config() -> AppConfig:
    """Configuration isolated from the environment and any .env file."""
    with patch.dict(os.environ, {}, clear=True):
        return AppConfig(config_file=None, _env_file=None)


@pytest.fixture
def kenmore() -> StopDescriptor:
    """An origin stop: departure times are authoritative."""
    return StopDescriptor(
        stop_id="place-kencl",
        route_id="60",
        direction_id=0,
        label="Kenmore (outbound)",
        is_origin=True,
        group="Route 60:",
    )


@pytest.fixture
def pearl_st() -> StopDescriptor:
    """A mid-route stop: arrival times are authoritative."""
    return StopDescriptor(
        stop_id="11366",
        route_id="60",
        direction_id=0,
        label="Pearl St @ Brookline Village (outbound)",
        group="Route 60:",
    )


@pytest.fixture
def now() -> datetime:
    return at(14, 0)
