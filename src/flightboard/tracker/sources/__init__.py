"""Pluggable flight data sources."""

from flightboard.tracker.sources.base import FlightSource
from flightboard.tracker.sources.flightstats import FlightStatsSource

__all__ = ["FlightSource", "FlightStatsSource"]
