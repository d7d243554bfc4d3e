"""Terminal output adapters."""

from mbta_departures.adapters.terminal.departure_formatter import DepartureFormatter
from mbta_departures.adapters.terminal.report_renderer import TerminalReportRenderer

__all__ = ["DepartureFormatter", "TerminalReportRenderer"]
