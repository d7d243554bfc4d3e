"""Stop result domain model."""

from dataclasses import dataclass
from datetime import datetime

from mbta_departures.domain.models.error_details import ErrorDetails
from mbta_departures.domain.models.merged_departure import MergedDeparture
from mbta_departures.domain.models.stop_descriptor import StopDescriptor


@dataclass(frozen=True)
class StopResult:
    """Outcome for one stop in one run: departures, or why there are none."""

    stop: StopDescriptor
    departures: tuple[MergedDeparture, ...] = ()
    error: ErrorDetails | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, stop: StopDescriptor, departures: list[MergedDeparture]
    ) -> "StopResult":
        return cls(stop=stop, departures=tuple(departures))

    @classmethod
    def failure(cls, stop: StopDescriptor, error: ErrorDetails) -> "StopResult":
        return cls(stop=stop, error=error)


@dataclass(frozen=True)
class FleetReport:
    """All stop results of a run, in configuration order."""

    now: datetime
    results: tuple[StopResult, ...]

    @property
    def failed(self) -> list[StopResult]:
        return [result for result in self.results if not result.ok]
