"""Departure record domain model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DepartureSource(str, Enum):
    """Where a departure time came from."""

    SCHEDULED = "scheduled"
    LIVE = "live"


@dataclass(frozen=True)
class DepartureRecord:
    """One potential departure from a single time source."""

    timestamp: datetime
    source: DepartureSource
    trip_id: str
    stops_away: int | None = None  # Only known for live records

    @property
    def is_live(self) -> bool:
        return self.source is DepartureSource.LIVE
