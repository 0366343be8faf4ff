"""Summary figures for a query result, printed by ``flightboard query --stats``."""

from dataclasses import dataclass, field
from typing import Dict, List

import pandas as pd

from flightboard.tracker.dates import minutes_of_day
from flightboard.tracker.models import FlightRecord

CARRIER_COLUMNS = ["company", "flights", "avg_duration"]


@dataclass
class FlightStats:
    """Per-carrier and per-hour breakdown of a set of flights."""

    total_flights: int = 0
    overnight_flights: int = 0
    average_duration: float = 0.0
    carriers: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=CARRIER_COLUMNS))
    by_hour: Dict[int, int] = field(default_factory=dict)


def compute_stats(flights: List[FlightRecord]) -> FlightStats:
    """Group flights by carrier (count, mean duration) and by departure hour."""
    if not flights:
        return FlightStats()

    df = pd.DataFrame(
        {
            "company": [f.company for f in flights],
            "duration": [f.duration for f in flights],
            "hour": [minutes_of_day(f.departure) // 60 for f in flights],
            "overnight": [f.arrival_date != f.departure_date for f in flights],
        }
    )

    carriers = (
        df.groupby("company")["duration"]
        .agg(flights="count", avg_duration="mean")
        .reset_index()
        .sort_values(["flights", "company"], ascending=[False, True], ignore_index=True)
    )
    by_hour = {int(h): int(n) for h, n in df.groupby("hour").size().items()}

    return FlightStats(
        total_flights=len(df),
        overnight_flights=int(df["overnight"].sum()),
        average_duration=float(df["duration"].mean()),
        carriers=carriers,
        by_hour=by_hour,
    )
