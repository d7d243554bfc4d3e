"""Domain layer - core business logic and models."""

from mbta_departures.domain.exceptions import (
    MalformedResponseError,
    MbtaApiError,
    RateLimitedError,
)
from mbta_departures.domain.models import (
    DepartureRecord,
    DepartureSource,
    MergedDeparture,
    StopDescriptor,
    StopResult,
)
from mbta_departures.domain.ports import ReportRenderer, TimeSourceRepository

__all__ = [
    "DepartureRecord",
    "DepartureSource",
    "MalformedResponseError",
    "MbtaApiError",
    "MergedDeparture",
    "RateLimitedError",
    "ReportRenderer",
    "StopDescriptor",
    "StopResult",
    "TimeSourceRepository",
]
