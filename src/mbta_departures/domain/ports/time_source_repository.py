"""Time source repository port."""

from datetime import datetime
from typing import Protocol

from mbta_departures.domain.models.departure_record import DepartureRecord
from mbta_departures.domain.models.stop_descriptor import StopDescriptor


class TimeSourceRepository(Protocol):
    """Port for retrieving normalized departure times for one stop."""

    async def get_scheduled_departures(
        self, stop: StopDescriptor, now: datetime
    ) -> list[DepartureRecord]:
        """Get timetable departures for a stop, starting shortly before now."""
        ...

    async def get_live_departures(self, stop: StopDescriptor) -> list[DepartureRecord]:
        """Get live predicted departures for a stop."""
        ...
