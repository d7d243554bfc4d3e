"""Formatter for departure times."""

from datetime import datetime

from mbta_departures.adapters.config.app_config import AppConfig
from mbta_departures.domain.models.merged_departure import MergedDeparture

LIVE_MARKER = "🟢"
SCHEDULED_MARKER = "📅"


class DepartureFormatter:
    """Formats single departures as compact terminal text."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with the display timezone.
        """
        self.config = config

    def format_departure(
        self, departure: MergedDeparture, now: datetime, include_seconds: bool = False
    ) -> str:
        """Format a departure, e.g. '🟢 14:09:30 (in 9m) (2 stops)' or '📅 14:20 (in 20m)'."""
        marker = LIVE_MARKER if departure.is_live else SCHEDULED_MARKER
        text = f"{marker} {self.format_time(departure.timestamp, now, include_seconds)}"
        if departure.is_live and departure.stops_away:
            plural = "" if departure.stops_away == 1 else "s"
            text += f" ({departure.stops_away} stop{plural})"
        return text

    def format_time(self, when: datetime, now: datetime, include_seconds: bool = False) -> str:
        """Format a time as local clock time with a relative hint."""
        local = when.astimezone(self.config.zone)
        time_str = local.strftime("%H:%M:%S" if include_seconds else "%H:%M")
        relative = self.format_relative(when, now)
        return f"{time_str} ({relative})" if relative else time_str

    @staticmethod
    def format_relative(when: datetime, now: datetime) -> str:
        """Format the offset from now as 'in 5m' or '3m ago', empty within a minute."""
        # Whole minutes, truncated towards zero
        minutes = int((when - now).total_seconds() / 60)
        if minutes == 0:
            return ""
        if minutes < 0:
            return f"{-minutes}m ago"
        return f"in {minutes}m"
