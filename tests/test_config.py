"""Tests for configuration adapter."""

import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from unittest.mock import patch

import pytest

from mbta_departures.adapters.config import AppConfig


def _write_toml(content: str) -> str:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(content)
        return f.name


def test_config_loads_defaults() -> None:
    """Given no environment variables, when loading config, then defaults are used."""
    with patch.dict(os.environ, {}, clear=True):
        config = AppConfig(_env_file=None)

    assert config.mbta_api_base_url == "https://api-v3.mbta.com"
    assert config.mbta_api_key is None
    assert config.mbta_api_timeout == 10
    assert config.schedule_page_limit == 20
    assert config.prediction_page_limit == 3
    assert config.timezone == "America/New_York"
    assert config.config_file == "config.example.toml"


def test_config_loads_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given environment variables, when loading config, then they are used."""
    monkeypatch.setenv("MBTA_API_KEY", "abc123")
    monkeypatch.setenv("MBTA_API_TIMEOUT", "2.5")
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig(_env_file=None)

    assert config.mbta_api_key == "abc123"
    assert config.mbta_api_timeout == 2.5
    assert config.timezone == "UTC"
    assert config.log_level == "DEBUG"


def test_config_validates_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Given an unknown timezone, when loading config, then validation error is raised."""
    monkeypatch.setenv("TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="not a valid IANA timezone"):
        AppConfig(_env_file=None)


@pytest.mark.parametrize(
    "variable", ["MBTA_API_TIMEOUT", "SCHEDULE_PAGE_LIMIT", "PREDICTION_PAGE_LIMIT"]
)
def test_config_rejects_non_positive_values(monkeypatch: pytest.MonkeyPatch, variable: str) -> None:
    """Given a zero limit or timeout, when loading config, then validation error is raised."""
    monkeypatch.setenv(variable, "0")

    with pytest.raises(ValueError, match="must be positive"):
        AppConfig(_env_file=None)


def test_config_parses_grouped_stops_from_toml() -> None:
    """Given groups of stops in TOML, when parsing, then stops carry their group title in order."""
    temp_path = _write_toml(
        """
[[groups]]
title = "Route 60:"

[[groups.stops]]
label = "Kenmore (outbound)"
route_id = "60"
stop_id = "place-kencl"
direction_id = 0
is_origin = true

[[groups.stops]]
label = "High St @ Highland Rd (inbound)"
route_id = "60"
stop_id = "1553"
direction_id = 1

[[groups]]
title = "Green Line D:"

[[groups.stops]]
label = "Copley (to Riverside)"
route_id = "Green-D"
stop_id = "place-coecl"
"""
    )

    try:
        parsed = AppConfig(config_file=temp_path, _env_file=None).get_stops_config()
    finally:
        Path(temp_path).unlink()

    assert [(s["stop_id"], s["group"]) for s in parsed] == [
        ("place-kencl", "Route 60:"),
        ("1553", "Route 60:"),
        ("place-coecl", "Green Line D:"),
    ]
    assert parsed[0]["is_origin"] is True


def test_config_parses_ungrouped_stops_after_groups() -> None:
    """Given top-level stops next to groups, when parsing, then ungrouped stops follow with an empty title."""
    temp_path = _write_toml(
        """
[[stops]]
route_id = "1"
stop_id = "64"

[[groups]]
title = "Green Line D:"

[[groups.stops]]
route_id = "Green-D"
stop_id = "place-bvmnl"
"""
    )

    try:
        parsed = AppConfig(config_file=temp_path, _env_file=None).get_stops_config()
    finally:
        Path(temp_path).unlink()

    assert [(s["stop_id"], s["group"]) for s in parsed] == [
        ("place-bvmnl", "Green Line D:"),
        ("64", ""),
    ]


def test_config_raises_error_when_file_not_found() -> None:
    """Given non-existent config file, when loading stops, then FileNotFoundError is raised."""
    config = AppConfig(config_file="nonexistent.toml", _env_file=None)

    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        config.get_stops_config()


def test_config_raises_error_when_config_file_not_set() -> None:
    """Given config_file is None, when loading stops, then ValueError is raised."""
    config = AppConfig(config_file=None, _env_file=None)

    with pytest.raises(ValueError, match="config_file must be set"):
        config.get_stops_config()


def test_config_rejects_stops_that_are_not_a_list() -> None:
    """Given 'stops' as a table instead of an array, when parsing, then ValueError is raised."""
    temp_path = _write_toml('[stops]\nstop_id = "64"\n')

    try:
        config = AppConfig(config_file=temp_path, _env_file=None)
        with pytest.raises(ValueError, match="must be a list"):
            config.get_stops_config()
    finally:
        Path(temp_path).unlink()


def test_example_config_is_loadable() -> None:
    """Given the shipped example config, when parsing, then all six stops are found."""
    example = Path(__file__).resolve().parents[1] / "config.example.toml"

    parsed = AppConfig(config_file=str(example), _env_file=None).get_stops_config()

    assert len(parsed) == 6
