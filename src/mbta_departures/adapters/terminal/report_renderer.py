"""Terminal report renderer laying stops out in a grid."""

import itertools
import unicodedata

from mbta_departures.adapters.terminal.departure_formatter import DepartureFormatter
from mbta_departures.domain.models.stop_result import FleetReport, StopResult
from mbta_departures.domain.ports.report_renderer import ReportRenderer

COLUMN_WIDTH = 32
COLUMN_GAP = "  "
NO_TRIPS_TEXT = "No upcoming trips"


def display_width(text: str) -> int:
    """Terminal columns taken by text; wide characters such as emoji take two."""
    return sum(2 if unicodedata.east_asian_width(char) in ("W", "F") else 1 for char in text)


def pad_to_width(text: str, width: int) -> str:
    """Pad text with spaces up to a display width."""
    return text + " " * max(0, width - display_width(text))


def wrap_words(text: str, width: int) -> list[str]:
    """Greedy word wrap; words longer than width get a line of their own."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
        elif display_width(current) + display_width(word) + 1 <= width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


class TerminalReportRenderer(ReportRenderer):
    """Renders a FleetReport as grouped columns of stops."""

    def __init__(self, formatter: DepartureFormatter, column_width: int = COLUMN_WIDTH) -> None:
        self.formatter = formatter
        self.column_width = column_width

    def render(self, report: FleetReport) -> str:
        """Render every group of stops, separated by blank lines."""
        blocks = []
        for title, results in itertools.groupby(report.results, key=lambda r: r.stop.group):
            blocks.append(self._render_group(title, list(results), report))
        return "\n".join(blocks)

    def stop_lines(self, result: StopResult, report: FleetReport) -> list[str]:
        """Text lines listing one stop's departures."""
        if result.error is not None:
            return [f"Unavailable ({result.error.reason})"]
        if not result.departures:
            return [NO_TRIPS_TEXT]

        # Seconds only on the soonest live departure
        first_live = next((d.rank for d in result.departures if d.is_live), None)
        return [
            self.formatter.format_departure(
                departure, report.now, include_seconds=departure.rank == first_live
            )
            for departure in result.departures
        ]

    def _render_group(self, title: str, results: list[StopResult], report: FleetReport) -> str:
        names = [wrap_words(result.stop.label, self.column_width) for result in results]
        times = [self.stop_lines(result, report) for result in results]

        lines = [title] if title else []
        lines.extend(self._rows(names))
        lines.extend(self._rows(times))
        return "\n".join(lines) + "\n"

    def _rows(self, columns: list[list[str]]) -> list[str]:
        height = max((len(column) for column in columns), default=0)
        rows = []
        for row in range(height):
            cells = [column[row] if row < len(column) else "" for column in columns]
            rows.append(
                COLUMN_GAP.join(pad_to_width(cell, self.column_width) for cell in cells).rstrip()
            )
        return rows
