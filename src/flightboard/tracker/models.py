"""Data models for scraped and canonical flights."""

from dataclasses import asdict, dataclass, field, fields
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class FlightType(str, Enum):
    """Which board of the airport a page was scraped from."""

    ARRIVALS = "arrivals"
    DEPARTURES = "departures"


@dataclass(frozen=True)
class RawFlightEntry:
    """One flight entry as embedded in a flight tracker page (before normalization)."""

    carrier_code: str
    carrier_name: str
    flight_number: str
    departure_time: str
    arrival_time: str
    airport_code: str
    airport_city: str
    is_codeshare: bool = False
    operated_by: Optional[str] = None

    @classmethod
    def from_dict(cls, item: Dict[str, Any]) -> "RawFlightEntry":
        """Build from the page payload. Raises KeyError/TypeError on missing structure."""
        carrier = item["carrier"]
        airport = item["airport"]
        return cls(
            carrier_code=str(carrier["fs"]),
            carrier_name=str(carrier.get("name") or ""),
            flight_number=str(carrier["flightNumber"]),
            departure_time=str(item["departureTime"]["time24"]),
            arrival_time=str(item["arrivalTime"]["time24"]),
            airport_code=str(airport["fs"]),
            airport_city=str(airport.get("city") or ""),
            is_codeshare=bool(item.get("isCodeshare") or False),
            operated_by=item.get("operatedBy") or None,
        )


@dataclass(frozen=True)
class FlightRecord:
    """Normalized flight record, as cached and returned to callers."""

    flight_id: str
    origin_iata: str
    destination_iata: str
    origin_name: str
    destination_name: str
    departure: str
    arrival: str
    departure_date: str
    arrival_date: str
    duration: int
    company: str
    company_logo: str
    flight: str

    def route(self) -> str:
        """Return route as ORIGIN-DESTINATION."""
        return f"{self.origin_iata}-{self.destination_iata}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlightRecord":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass
class FlightQuery:
    """Exact-match lookup on route and departure date."""

    origin: str
    destination: str
    flight_date: date

    def matches(self, record: FlightRecord) -> bool:
        return (
            record.origin_iata == self.origin
            and record.destination_iata == self.destination
            and record.departure_date == self.flight_date.isoformat()
        )


@dataclass
class QueryResult:
    """Result of a flight query."""

    flights: List[FlightRecord] = field(default_factory=list)
    query: Optional[FlightQuery] = None

    @property
    def total_flights(self) -> int:
        return len(self.flights)

    def to_dict(self) -> Dict[str, Any]:
        """Response body: count plus the matching records."""
        return {
            "totalFlights": self.total_flights,
            "flights": [f.to_dict() for f in self.flights],
        }

    def to_dataframe(self):
        """Convert to pandas DataFrame."""
        import pandas as pd

        columns = [f.name for f in fields(FlightRecord)]
        if not self.flights:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([f.to_dict() for f in self.flights], columns=columns)
