"""MBTA v3 API adapters."""

from mbta_departures.adapters.mbta_api.mbta_time_source_repository import (
    MbtaTimeSourceRepository,
)

__all__ = ["MbtaTimeSourceRepository"]
