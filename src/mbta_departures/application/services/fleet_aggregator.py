"""Concurrent fetch-and-merge across all configured stops."""

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from mbta_departures.application.services.stop_merger import StopMerger
from mbta_departures.domain.exceptions import MbtaApiError, RateLimitedError
from mbta_departures.domain.models import ErrorDetails, FleetReport, StopDescriptor, StopResult

if TYPE_CHECKING:
    from mbta_departures.domain.ports import TimeSourceRepository

logger = logging.getLogger(__name__)


def _extract_error_details(error: Exception) -> ErrorDetails:
    """Turn a per-stop fetch failure into a displayable reason."""
    if isinstance(error, MbtaApiError):
        status_code = error.status_code
        if status_code == 502:
            reason = "Bad gateway (server error)"
        elif status_code == 503:
            reason = "Service unavailable"
        elif status_code == 504:
            reason = "Gateway timeout"
        elif status_code is not None:
            reason = f"HTTP {status_code}"
        else:
            reason = str(error) or "Request failed"
        return ErrorDetails(status_code=status_code, reason=reason)
    return ErrorDetails(reason=f"Unexpected error: {type(error).__name__}")


class FleetAggregator:
    """Fetches and merges departures for every configured stop in one run."""

    def __init__(
        self,
        repository: "TimeSourceRepository",
        merger: StopMerger | None = None,
    ) -> None:
        """Initialize with a time source repository.

        Args:
            repository: Source of scheduled and live departures.
            merger: Merge step applied per stop. Defaults to a StopMerger.
        """
        self._repository = repository
        self._merger = merger or StopMerger()

    async def collect(
        self, stops: list[StopDescriptor], now: datetime | None = None
    ) -> FleetReport:
        """Produce one StopResult per stop, in configuration order.

        Each stop is fetched in its own task. A failure of one stop only fails
        that stop's result.

        Raises:
            RateLimitedError: Any request was rate limited. Outstanding work is
                cancelled and no partial results are returned.
        """
        now = now or datetime.now(UTC)
        results: list[StopResult | None] = [None] * len(stops)

        async def fill_slot(index: int, stop: StopDescriptor) -> None:
            results[index] = await self._collect_stop(stop, now)

        tasks = [
            asyncio.create_task(fill_slot(index, stop), name=f"stop-{stop.stop_id}")
            for index, stop in enumerate(stops)
        ]
        try:
            await asyncio.gather(*tasks)
        except RateLimitedError:
            logger.error("MBTA API rate limit hit, abandoning remaining requests")
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return FleetReport(now=now, results=tuple(r for r in results if r is not None))

    async def _collect_stop(self, stop: StopDescriptor, now: datetime) -> StopResult:
        """Fetch both sources for one stop and merge them.

        Every failure except rate limiting is isolated into the stop's result.
        """
        scheduled, live = await asyncio.gather(
            self._repository.get_scheduled_departures(stop, now),
            self._repository.get_live_departures(stop),
            return_exceptions=True,
        )
        errors = [outcome for outcome in (scheduled, live) if isinstance(outcome, BaseException)]
        for error in errors:
            # Rate limiting ends the run; cancellation is not ours to swallow
            if isinstance(error, RateLimitedError) or not isinstance(error, Exception):
                raise error
        if errors:
            details = _extract_error_details(errors[0])
            logger.warning(f"Failed to fetch departures for {stop.label}: {details.reason}")
            return StopResult.failure(stop, details)

        departures = self._merger.merge(scheduled, live, now)
        logger.debug(f"{stop.label}: {len(departures)} upcoming departure(s)")
        return StopResult.success(stop, departures)
