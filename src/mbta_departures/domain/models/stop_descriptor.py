"""Stop descriptor domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StopDescriptor:
    """A statically configured stop to report departures for."""

    stop_id: str
    route_id: str
    direction_id: int  # 0 or 1, as used by the MBTA API
    label: str
    is_origin: bool = False  # departure_time is authoritative at the start of a route
    group: str = ""  # Report section title, e.g. "Route 60:"
