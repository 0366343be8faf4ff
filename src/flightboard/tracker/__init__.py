"""Flight board scraping, caching and query package."""

from flightboard.tracker.models import (
    FlightQuery,
    FlightRecord,
    FlightType,
    QueryResult,
    RawFlightEntry,
)
from flightboard.tracker.service import FlightService

__all__ = [
    "FlightQuery",
    "FlightRecord",
    "FlightService",
    "FlightType",
    "QueryResult",
    "RawFlightEntry",
]
