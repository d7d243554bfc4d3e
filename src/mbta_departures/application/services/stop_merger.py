"""Merging of timetable and live departures for a single stop."""

import logging
from datetime import datetime

from mbta_departures.domain.models import DepartureRecord, MergedDeparture
from mbta_departures.domain.time_windows import (
    MAX_DEPARTURES_PER_STOP,
    SCHEDULE_LOOKBACK,
    STALENESS_CUTOFF,
)

logger = logging.getLogger(__name__)


class StopMerger:
    """Combines a stop's scheduled and live departures into one ranked list."""

    def __init__(self, max_departures: int = MAX_DEPARTURES_PER_STOP) -> None:
        self.max_departures = max_departures

    def merge(
        self,
        scheduled: list[DepartureRecord],
        live: list[DepartureRecord],
        now: datetime,
    ) -> list[MergedDeparture]:
        """Merge both sources into at most ``max_departures`` upcoming departures.

        A live record always replaces the scheduled record of the same trip.
        Trips without a prediction fall back to their timetable entry.

        Args:
            scheduled: Timetable departures for the stop, in any order.
            live: Live predicted departures for the stop, in any order.
            now: Instant the thresholds are evaluated against.

        Returns:
            Departures sorted by time, ranked from 0. Empty when nothing is upcoming.
        """
        retained = self._within_lookback(scheduled, now)
        candidates = self._prefer_live(retained, live)
        upcoming = self._drop_stale(candidates, now)
        upcoming.sort(key=self._sort_key)

        merged = [
            MergedDeparture(
                timestamp=record.timestamp,
                source=record.source,
                rank=rank,
                stops_away=record.stops_away,
            )
            for rank, record in enumerate(upcoming[: self.max_departures])
        ]
        logger.debug(
            f"Merged {len(scheduled)} scheduled and {len(live)} live records "
            f"into {len(merged)} departure(s)"
        )
        return merged

    @staticmethod
    def _within_lookback(
        scheduled: list[DepartureRecord], now: datetime
    ) -> list[DepartureRecord]:
        """Keep timetable entries recent enough to be matched against predictions."""
        earliest = now - SCHEDULE_LOOKBACK
        return [record for record in scheduled if record.timestamp >= earliest]

    @staticmethod
    def _prefer_live(
        scheduled: list[DepartureRecord], live: list[DepartureRecord]
    ) -> list[DepartureRecord]:
        """Pick the best-known record per trip."""
        best: dict[str, DepartureRecord] = {}
        for record in scheduled:
            existing = best.get(record.trip_id)
            if existing is None or not existing.is_live:
                best[record.trip_id] = record
        for record in live:
            best[record.trip_id] = record
        return list(best.values())

    @staticmethod
    def _drop_stale(
        candidates: list[DepartureRecord], now: datetime
    ) -> list[DepartureRecord]:
        """Drop departures that left too long ago to be shown."""
        cutoff = now - STALENESS_CUTOFF
        return [record for record in candidates if record.timestamp >= cutoff]

    @staticmethod
    def _sort_key(record: DepartureRecord) -> tuple[datetime, int, str]:
        # Same instant: live first, then trip id for a reproducible order
        return (record.timestamp, 0 if record.is_live else 1, record.trip_id)
