"""Merged departure domain model."""

from dataclasses import dataclass
from datetime import datetime

from mbta_departures.domain.models.departure_record import DepartureSource


@dataclass(frozen=True)
class MergedDeparture:
    """One upcoming departure shown for a stop."""

    timestamp: datetime
    source: DepartureSource
    rank: int  # Position among the stop's upcoming departures, starting at 0
    stops_away: int | None = None

    @property
    def is_live(self) -> bool:
        return self.source is DepartureSource.LIVE
