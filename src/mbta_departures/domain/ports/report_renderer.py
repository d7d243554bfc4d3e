"""Report renderer port."""

from typing import Protocol

from mbta_departures.domain.models.stop_result import FleetReport


class ReportRenderer(Protocol):
    """Port for turning a run's results into text for the user."""

    def render(self, report: FleetReport) -> str:
        """Render the whole report."""
        ...
