"""Tests for the opt-in API request logger."""

import logging

import pytest

from mbta_departures.adapters.api_request_logger import (
    REDACTED,
    log_api_request,
    masked_headers,
    request_logging_enabled,
    request_url,
)

LOGGER_NAME = "mbta_departures.adapters.api_request_logger"
SCHEDULES_URL = "https://api-v3.mbta.com/schedules"


@pytest.fixture
def logging_on(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("MBTA_LOG_REQUESTS", "true")
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("True", True), ("false", False), ("1", False)],
)
def test_request_logging_enabled_reads_env(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
) -> None:
    """Given MBTA_LOG_REQUESTS set, when checking, then only 'true' enables logging."""
    monkeypatch.setenv("MBTA_LOG_REQUESTS", value)

    assert request_logging_enabled() is expected


def test_nothing_logged_by_default(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    """Given MBTA_LOG_REQUESTS unset, when a request is made, then nothing is logged."""
    monkeypatch.delenv("MBTA_LOG_REQUESTS", raising=False)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    log_api_request("GET", SCHEDULES_URL, params={"filter[stop]": "11366"})

    assert caplog.records == []


def test_request_url_keeps_param_order() -> None:
    """Given filters in request order, when building the URL, then they are not re-sorted."""
    url = request_url(SCHEDULES_URL, {"filter[stop]": "11366", "filter[route]": "60"})

    assert list(url.query.items()) == [("filter[stop]", "11366"), ("filter[route]", "60")]
    assert url.path == "/schedules"


def test_request_url_extends_existing_query() -> None:
    """Given a URL with a query string, when adding params, then both are kept."""
    url = request_url("https://api-v3.mbta.com/stops?sort=name", {"page[limit]": 5})

    assert list(url.query.items()) == [("sort", "name"), ("page[limit]", "5")]


def test_logged_url_is_the_encoded_request_url(
    logging_on: None, caplog: pytest.LogCaptureFixture
) -> None:
    """Given logging enabled, when a request is made, then the URL is logged as it is sent."""
    params = {"filter[stop]": "place-kencl", "filter[min_time]": "13:30"}

    log_api_request("GET", SCHEDULES_URL, params=params)

    assert f"API request: GET {request_url(SCHEDULES_URL, params)}" in caplog.text


def test_api_key_is_masked(logging_on: None, caplog: pytest.LogCaptureFixture) -> None:
    """Given an x-api-key header, when logging, then its value never appears."""
    log_api_request(
        "GET",
        SCHEDULES_URL,
        headers={"accept": "application/vnd.api+json", "x-api-key": "secret-key"},
    )

    assert "accept: application/vnd.api+json" in caplog.text
    assert f"x-api-key: {REDACTED}" in caplog.text
    assert "secret-key" not in caplog.text


def test_masked_headers_is_case_insensitive() -> None:
    """Given credentials with mixed-case header names, when masking, then all are hidden."""
    masked = masked_headers({"Authorization": "Bearer t", "Cookie": "s=1", "Accept": "x"})

    assert masked == {"Authorization": REDACTED, "Cookie": REDACTED, "Accept": "x"}
