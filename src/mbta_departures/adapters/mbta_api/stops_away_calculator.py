"""Counting stops between a predicted trip's vehicle and the target stop."""

from typing import Any

from mbta_departures.adapters.mbta_api.constants import MAX_STOPS_AWAY
from mbta_departures.adapters.mbta_api.trip_entry_parser import TripEntryParser


class StopsAwayCalculator:
    """Works out how many stops away each predicted vehicle is.

    Vehicles report the platform (child stop) they are at, while the route's stop
    list names parent stations, so both sides are mapped to parent stations first.
    """

    def __init__(self, predictions_document: dict[str, Any]) -> None:
        """Index the vehicles and stops included with a predictions document."""
        self._predictions = [
            entry for entry in predictions_document.get("data", []) if isinstance(entry, dict)
        ]
        self._vehicle_stops: dict[str, str] = {}
        self._parent_stations: dict[str, str] = {}

        for resource in predictions_document.get("included") or []:
            if not isinstance(resource, dict) or not resource.get("id"):
                continue
            resource_id = str(resource["id"])
            if resource.get("type") == "vehicle":
                stop_id = TripEntryParser.related_id(resource, "stop")
                if stop_id:
                    self._vehicle_stops[resource_id] = stop_id
            elif resource.get("type") == "stop":
                self.add_stop(resource)

    def add_stop(self, resource: dict[str, Any]) -> None:
        """Record the parent station of a stop resource (itself if it has none)."""
        stop_id = str(resource.get("id", ""))
        if stop_id:
            parent_id = TripEntryParser.related_id(resource, "parent_station")
            self._parent_stations[stop_id] = parent_id or stop_id

    def _positions(self) -> dict[str, tuple[str, str]]:
        """Map trip id to (vehicle's stop, predicted stop) where both are known."""
        positions = {}
        for prediction in self._predictions:
            trip_id = TripEntryParser.related_id(prediction, "trip")
            vehicle_id = TripEntryParser.related_id(prediction, "vehicle")
            target_stop = TripEntryParser.related_id(prediction, "stop")
            vehicle_stop = self._vehicle_stops.get(vehicle_id) if vehicle_id else None
            if trip_id and vehicle_stop and target_stop:
                positions[trip_id] = (vehicle_stop, target_stop)
        return positions

    def unresolved_stop_ids(self) -> list[str]:
        """Stop ids whose parent station is not known from the included resources."""
        needed = {stop for pair in self._positions().values() for stop in pair}
        return sorted(needed - self._parent_stations.keys())

    def _to_parent(self, stop_id: str) -> str:
        return self._parent_stations.get(stop_id, stop_id)

    def calculate(self, route_stop_ids: list[str]) -> dict[str, int]:
        """Stops away per trip id, for trips where it could be determined.

        Args:
            route_stop_ids: The route's stops in travel order.

        Returns:
            Mapping of trip id to a stop count between 1 and MAX_STOPS_AWAY.
        """
        if not route_stop_ids:
            return {}

        index = {stop_id: position for position, stop_id in enumerate(route_stop_ids)}
        stops_away = {}
        for trip_id, (vehicle_stop, target_stop) in self._positions().items():
            vehicle_index = index.get(self._to_parent(vehicle_stop))
            target_index = index.get(self._to_parent(target_stop))
            if vehicle_index is None or target_index is None:
                continue
            distance = abs(target_index - vehicle_index)
            if 0 < distance <= MAX_STOPS_AWAY:
                stops_away[trip_id] = distance
        return stops_away
