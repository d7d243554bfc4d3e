"""Parser for MBTA schedule and prediction resources."""

import logging
from datetime import datetime
from typing import Any

from mbta_departures.domain.models.departure_record import DepartureRecord, DepartureSource

logger = logging.getLogger(__name__)


class TripEntryParser:
    """Parses JSON:API schedule/prediction resources into DepartureRecord objects."""

    @staticmethod
    def parse_entries(
        entries: list[Any], is_origin: bool, source: DepartureSource
    ) -> list[DepartureRecord]:
        """Parse trip entries for one stop/direction.

        Entries without a usable time or trip id are skipped. The result keeps the
        order of ``entries`` and is not sorted.

        Args:
            entries: The "data" list of a schedules or predictions document.
            is_origin: Use departure_time instead of arrival_time.
            source: Source tag for every produced record.

        Returns:
            List of DepartureRecord objects.
        """
        records = []
        for entry in entries:
            record = TripEntryParser._parse_entry(entry, is_origin, source)
            if record:
                records.append(record)

        skipped = len(entries) - len(records)
        if skipped:
            logger.debug(f"Skipped {skipped} {source.value} entr{'y' if skipped == 1 else 'ies'}")
        return records

    @staticmethod
    def _parse_entry(
        entry: Any, is_origin: bool, source: DepartureSource
    ) -> DepartureRecord | None:
        """Parse a single resource into a DepartureRecord."""
        if not isinstance(entry, dict):
            return None

        trip_id = TripEntryParser.related_id(entry, "trip")
        if not trip_id:
            return None

        attributes = entry.get("attributes")
        if not isinstance(attributes, dict):
            return None
        timestamp = TripEntryParser.parse_time(
            TripEntryParser.select_time(attributes, is_origin)
        )
        if timestamp is None:
            return None

        return DepartureRecord(timestamp=timestamp, source=source, trip_id=trip_id)

    @staticmethod
    def select_time(attributes: dict[str, Any], is_origin: bool) -> str | None:
        """Pick the authoritative time field of a resource.

        Origin stops only have a meaningful departure time. Elsewhere the arrival
        time is used, falling back to the departure time.
        """
        if is_origin:
            return attributes.get("departure_time")
        return attributes.get("arrival_time") or attributes.get("departure_time")

    @staticmethod
    def parse_time(time_str: Any) -> datetime | None:
        """Parse an ISO 8601 time string with offset."""
        if not time_str or not isinstance(time_str, str):
            return None

        try:
            parsed = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except ValueError:
            return None
        # Naive times cannot be compared against now
        return parsed if parsed.tzinfo is not None else None

    @staticmethod
    def related_id(resource: dict[str, Any], relationship: str) -> str | None:
        """Get the id a resource's relationship points to, if any."""
        relationships = resource.get("relationships")
        if not isinstance(relationships, dict):
            return None
        related = relationships.get(relationship)
        data = related.get("data") if isinstance(related, dict) else None
        if not isinstance(data, dict):
            return None
        related_id = data.get("id")
        return str(related_id) if related_id else None
