"""MBTA departures - next departures per stop from schedules and live predictions."""

__version__ = "0.1.0"
