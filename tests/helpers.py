"""Builders and fakes shared by the tests."""

from collections.abc import Callable
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo

from mbta_departures.domain.models import DepartureRecord, DepartureSource

BOSTON = ZoneInfo("America/New_York")


def at(hour: int, minute: int, second: int = 0) -> datetime:
    """A Boston wall-clock instant on a fixed service day."""
    return datetime(2024, 6, 3, hour, minute, second, tzinfo=BOSTON)


def scheduled(when: datetime, trip_id: str) -> DepartureRecord:
    return DepartureRecord(timestamp=when, source=DepartureSource.SCHEDULED, trip_id=trip_id)


def live(when: datetime, trip_id: str, stops_away: int | None = None) -> DepartureRecord:
    return DepartureRecord(
        timestamp=when, source=DepartureSource.LIVE, trip_id=trip_id, stops_away=stops_away
    )


def trip_entry(
    trip_id: str,
    arrival: datetime | None = None,
    departure: datetime | None = None,
    **relationships: str,
) -> dict[str, Any]:
    """A JSON:API schedule/prediction resource."""
    rels: dict[str, Any] = {"trip": {"data": {"type": "trip", "id": trip_id}}}
    for name, related_id in relationships.items():
        rels[name] = {"data": {"type": name, "id": related_id}}
    return {
        "type": "prediction",
        "id": f"entry-{trip_id}",
        "attributes": {
            "arrival_time": arrival.isoformat() if arrival else None,
            "departure_time": departure.isoformat() if departure else None,
        },
        "relationships": rels,
    }


def make_response(
    status: int = 200,
    payload: Any = None,
    headers: dict[str, str] | None = None,
    json_error: Exception | None = None,
) -> AsyncMock:
    """A fake aiohttp response."""
    response = AsyncMock()
    response.status = status
    response.headers = headers or {}
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    response.text.return_value = "" if payload is None else str(payload)
    return response


def make_session(handler: Callable[[str, dict[str, str]], Any]) -> MagicMock:
    """A fake aiohttp session whose get() is answered by handler(url, params).

    handler returns a response from make_response, or an exception instance to
    raise when the request is entered.
    """
    session = MagicMock()

    def get(url: str, params: dict[str, str] | None = None, **_kwargs: Any) -> MagicMock:
        outcome = handler(url, params or {})
        context = MagicMock()
        if isinstance(outcome, BaseException):
            context.__aenter__ = AsyncMock(side_effect=outcome)
        else:
            context.__aenter__ = AsyncMock(return_value=outcome)
        context.__aexit__ = AsyncMock(return_value=False)
        return context

    session.get.side_effect = get
    return session
