"""Adapters layer - external system integrations."""

from mbta_departures.adapters.config import AppConfig
from mbta_departures.adapters.mbta_api import MbtaTimeSourceRepository
from mbta_departures.adapters.terminal import DepartureFormatter, TerminalReportRenderer

__all__ = [
    "AppConfig",
    "DepartureFormatter",
    "MbtaTimeSourceRepository",
    "TerminalReportRenderer",
]
