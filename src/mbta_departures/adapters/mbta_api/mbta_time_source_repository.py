"""MBTA time source repository adapter."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from mbta_departures.adapters.mbta_api.http_client import MbtaHttpClient
from mbta_departures.adapters.mbta_api.stops_away_calculator import StopsAwayCalculator
from mbta_departures.adapters.mbta_api.trip_entry_parser import TripEntryParser
from mbta_departures.domain.exceptions import MbtaApiError, RateLimitedError
from mbta_departures.domain.models.departure_record import DepartureRecord, DepartureSource
from mbta_departures.domain.models.stop_descriptor import StopDescriptor
from mbta_departures.domain.ports.time_source_repository import TimeSourceRepository
from mbta_departures.domain.time_windows import SCHEDULE_LOOKBACK

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from mbta_departures.adapters.config.app_config import AppConfig

logger = logging.getLogger(__name__)


class MbtaTimeSourceRepository(TimeSourceRepository):
    """Adapter reading schedules and predictions from the MBTA v3 API."""

    def __init__(self, session: "ClientSession", config: "AppConfig") -> None:
        """Initialize with an aiohttp session and app configuration.

        Args:
            session: aiohttp ClientSession shared by all requests of a run.
            config: Application configuration (API settings and agency timezone).
        """
        self._http_client = MbtaHttpClient(session=session, config=config)
        self._zone = config.zone

    async def get_scheduled_departures(
        self, stop: StopDescriptor, now: datetime
    ) -> list[DepartureRecord]:
        """Get timetable departures from SCHEDULE_LOOKBACK before now on."""
        min_time = (now - SCHEDULE_LOOKBACK).astimezone(self._zone)
        document = await self._http_client.fetch_schedules(stop, min_time)
        records = TripEntryParser.parse_entries(
            document["data"], stop.is_origin, DepartureSource.SCHEDULED
        )
        logger.debug(f"Fetched {len(records)} scheduled departures for stop {stop.stop_id}")
        return records

    async def get_live_departures(self, stop: StopDescriptor) -> list[DepartureRecord]:
        """Get live predicted departures, annotated with stops away where known."""
        document = await self._http_client.fetch_predictions(stop)
        records = TripEntryParser.parse_entries(
            document["data"], stop.is_origin, DepartureSource.LIVE
        )
        logger.debug(f"Fetched {len(records)} live departures for stop {stop.stop_id}")
        if not records:
            return records

        stops_away = await self._get_stops_away(stop, document)
        return [replace(record, stops_away=stops_away.get(record.trip_id)) for record in records]

    async def _get_stops_away(
        self, stop: StopDescriptor, predictions_document: dict[str, Any]
    ) -> dict[str, int]:
        """Best-effort stops away per trip. Failures only lose the annotation."""
        calculator = StopsAwayCalculator(predictions_document)
        unresolved = calculator.unresolved_stop_ids()

        route_stops, resolved_stops = await asyncio.gather(
            self._http_client.fetch_route_stops(stop.route_id, stop.direction_id),
            self._resolve_stops(unresolved),
            return_exceptions=True,
        )
        for outcome in (route_stops, resolved_stops):
            if isinstance(outcome, RateLimitedError) or (
                isinstance(outcome, BaseException) and not isinstance(outcome, MbtaApiError)
            ):
                raise outcome
        if isinstance(route_stops, MbtaApiError):
            logger.debug(f"Could not determine stops away for stop {stop.stop_id}: {route_stops}")
            return {}
        if isinstance(resolved_stops, MbtaApiError):
            # Parent stations from the included resources may still be enough
            logger.debug(f"Could not resolve stops for stop {stop.stop_id}: {resolved_stops}")
            resolved_stops = []

        for resource in resolved_stops:
            if isinstance(resource, dict):
                calculator.add_stop(resource)
        route_stop_ids = [
            str(resource["id"])
            for resource in route_stops["data"]
            if isinstance(resource, dict) and resource.get("id")
        ]
        return calculator.calculate(route_stop_ids)

    async def _resolve_stops(self, stop_ids: list[str]) -> list[Any]:
        if not stop_ids:
            return []
        document = await self._http_client.fetch_stops(stop_ids)
        return document["data"]
