"""Ports (interfaces) for the ports-and-adapters architecture."""

from mbta_departures.domain.ports.report_renderer import ReportRenderer
from mbta_departures.domain.ports.time_source_repository import TimeSourceRepository

__all__ = [
    "ReportRenderer",
    "TimeSourceRepository",
]
