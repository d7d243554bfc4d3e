"""HTTP client for MBTA v3 API requests.

API Documentation: https://api-v3.mbta.com/docs/swagger/index.html
"""

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import aiohttp

from mbta_departures.adapters.api_request_logger import log_api_request
from mbta_departures.adapters.mbta_api.constants import (
    API_KEY_HEADER,
    DEFAULT_HEADERS,
    PREDICTIONS_PATH,
    SCHEDULES_PATH,
    STOPS_PATH,
)
from mbta_departures.domain.exceptions import (
    MalformedResponseError,
    MbtaApiError,
    RateLimitedError,
)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

    from mbta_departures.adapters.config.app_config import AppConfig
    from mbta_departures.domain.models.stop_descriptor import StopDescriptor

logger = logging.getLogger(__name__)


class MbtaHttpClient:
    """HTTP client for the MBTA v3 JSON:API.

    Every request is attempted once and bounded by the configured timeout.
    Failures are raised as MbtaApiError subclasses.
    """

    def __init__(self, session: "ClientSession", config: "AppConfig") -> None:
        """Initialize with an aiohttp session and app configuration."""
        self._session = session
        self._base_url = config.mbta_api_base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=config.mbta_api_timeout)
        self._schedule_limit = config.schedule_page_limit
        self._prediction_limit = config.prediction_page_limit
        self._headers = dict(DEFAULT_HEADERS)
        if config.mbta_api_key:
            self._headers[API_KEY_HEADER] = config.mbta_api_key

    @staticmethod
    def _stop_filters(stop: "StopDescriptor") -> dict[str, str]:
        return {
            "filter[stop]": stop.stop_id,
            "filter[route]": stop.route_id,
            "filter[direction_id]": str(stop.direction_id),
            "sort": "arrival_time",
        }

    async def fetch_schedules(self, stop: "StopDescriptor", min_time: datetime) -> dict[str, Any]:
        """Fetch timetable entries for a stop from ``min_time`` (agency local time) on."""
        params = {
            **self._stop_filters(stop),
            "filter[min_time]": min_time.strftime("%H:%M"),
            "page[limit]": str(self._schedule_limit),
        }
        return await self.get_document(SCHEDULES_PATH, params)

    async def fetch_predictions(self, stop: "StopDescriptor") -> dict[str, Any]:
        """Fetch live predictions for a stop, including vehicles and stops."""
        params = {
            **self._stop_filters(stop),
            "page[limit]": str(self._prediction_limit),
            "include": "vehicle,stop",
        }
        return await self.get_document(PREDICTIONS_PATH, params)

    async def fetch_route_stops(self, route_id: str, direction_id: int) -> dict[str, Any]:
        """Fetch the ordered stop list of a route in one direction."""
        params = {"filter[route]": route_id, "filter[direction_id]": str(direction_id)}
        return await self.get_document(STOPS_PATH, params)

    async def fetch_stops(self, stop_ids: list[str]) -> dict[str, Any]:
        """Fetch stop resources by id."""
        params = {"filter[id]": ",".join(stop_ids)}
        return await self.get_document(STOPS_PATH, params)

    async def get_document(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        """GET a JSON:API document.

        Returns:
            The decoded document. Its "data" member is guaranteed to be a list.

        Raises:
            RateLimitedError: The API answered 429.
            MbtaApiError: Transport failure, timeout or other non-2xx status.
            MalformedResponseError: The body is not a JSON:API document with a data list.
        """
        url = f"{self._base_url}{path}"
        log_api_request("GET", url, params=params, headers=self._headers)

        try:
            async with self._session.get(
                url, params=params, headers=self._headers, timeout=self._timeout
            ) as response:
                return await self._handle_response(response, url)
        except MbtaApiError:
            raise
        except asyncio.TimeoutError as e:
            logger.warning(f"Request to {url} timed out after {self._timeout.total}s")
            raise MbtaApiError("Timed out") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise MbtaApiError("Connection failed") from e

    async def _handle_response(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        """Check status and decode the body."""
        if response.status == 429:
            retry_after = response.headers.get("Retry-After")
            logger.error(f"MBTA API rate limited {url} (Retry-After: {retry_after or 'unknown'})")
            raise RateLimitedError()

        if not 200 <= response.status < 300:
            await self._log_error_response(response, url)
            raise MbtaApiError(f"MBTA API returned status {response.status}", response.status)

        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            logger.warning(f"Response from {url} is not JSON: {e}")
            raise MalformedResponseError("Response is not JSON") from e

        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            logger.warning(f"Response from {url} has no data list")
            raise MalformedResponseError("Response has no data list")
        return data

    async def _log_error_response(self, response: "ClientResponse", url: str) -> None:
        """Log error response details."""
        error_text = await response.text()
        error_body = error_text[:500] if error_text else "(empty response body)"
        content_type = response.headers.get("Content-Type", "unknown")
        logger.warning(
            f"MBTA API returned status {response.status} for {url}: "
            f"{error_body} (Content-Type: {content_type})"
        )
