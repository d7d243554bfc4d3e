"""Stop descriptor loader."""

import logging

from mbta_departures.adapters.config.app_config import AppConfig
from mbta_departures.domain.models.stop_descriptor import StopDescriptor

logger = logging.getLogger(__name__)


class StopDescriptorLoader:
    """Loads stop descriptors from app config."""

    @staticmethod
    def load(config: AppConfig) -> list[StopDescriptor]:
        """Load stop descriptors from app config.

        Raises:
            ValueError: A stop is missing required fields or has an invalid direction,
                or no stops are configured.
        """
        stops_data = config.get_stops_config()
        descriptors: list[StopDescriptor] = []

        for position, stop_data in enumerate(stops_data, 1):
            stop_id = stop_data.get("stop_id")
            route_id = stop_data.get("route_id")
            if not stop_id or not route_id:
                raise ValueError(f"Stop #{position} must have both 'stop_id' and 'route_id'")

            direction_id = stop_data.get("direction_id", 0)
            try:
                direction_id = int(direction_id)
            except (ValueError, TypeError):
                direction_id = -1
            if direction_id not in (0, 1):
                raise ValueError(
                    f"Stop '{stop_id}' has direction_id "
                    f"{stop_data.get('direction_id')!r}, expected 0 or 1"
                )

            label = stop_data.get("label") or str(stop_id)
            descriptors.append(
                StopDescriptor(
                    stop_id=str(stop_id),
                    route_id=str(route_id),
                    direction_id=direction_id,
                    label=str(label),
                    is_origin=bool(stop_data.get("is_origin", False)),
                    group=str(stop_data.get("group", "")),
                )
            )

        if not descriptors:
            raise ValueError("No stops configured")

        logger.info(f"Loaded {len(descriptors)} stop(s) from {config.config_file}")
        return descriptors
