"""Abstract interface for flight data sources."""

from datetime import date
from typing import List, Protocol, runtime_checkable

from flightboard.tracker.models import FlightRecord, FlightType


@runtime_checkable
class FlightSource(Protocol):
    """Protocol for sources that produce canonical records for one airport."""

    def fetch_date(self, flight_type: FlightType, flight_date: date) -> List[FlightRecord]:
        """Fetch every configured time slot of one board for one date."""
        ...
