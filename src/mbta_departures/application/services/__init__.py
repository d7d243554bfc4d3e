"""Application services (use cases) for departure reporting."""

from mbta_departures.application.services.fleet_aggregator import FleetAggregator
from mbta_departures.application.services.stop_merger import StopMerger

__all__ = ["FleetAggregator", "StopMerger"]
