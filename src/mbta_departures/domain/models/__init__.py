"""Domain models for MBTA departures."""

from mbta_departures.domain.models.departure_record import DepartureRecord, DepartureSource
from mbta_departures.domain.models.error_details import ErrorDetails
from mbta_departures.domain.models.merged_departure import MergedDeparture
from mbta_departures.domain.models.stop_descriptor import StopDescriptor
from mbta_departures.domain.models.stop_result import FleetReport, StopResult

__all__ = [
    "DepartureRecord",
    "DepartureSource",
    "ErrorDetails",
    "FleetReport",
    "MergedDeparture",
    "StopDescriptor",
    "StopResult",
]
