"""Calendar and duration helpers for scraped schedule times."""

from datetime import date, timedelta
from typing import Callable, List, Optional

MINUTES_PER_DAY = 24 * 60


def format_date(d: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def next_day(d: date) -> date:
    return d + timedelta(days=1)


def previous_day(d: date) -> date:
    return d - timedelta(days=1)


def forecast_window(days: int, today: Optional[Callable[[], date]] = None) -> List[date]:
    """Return today and the following days - 1 dates (inclusive)."""
    start = (today or date.today)()
    return [start + timedelta(days=i) for i in range(days)]


def is_overnight(departure_time: str, arrival_time: str) -> bool:
    """True when the arrival clock time is earlier than the departure clock time."""
    return arrival_time < departure_time


def minutes_of_day(hhmm: str) -> int:
    """Convert HH:MM into minutes past midnight. Unparsable parts count as 0."""
    parts = (hhmm or "").split(":")
    total = 0
    for part, factor in zip(parts[:2], (60, 1)):
        try:
            total += int(part) * factor
        except ValueError:
            pass
    return total


def calculate_duration(departure_time: str, arrival_time: str, crosses_midnight: bool) -> int:
    """Flight duration in minutes between two local clock times.

    Adds a full day when the caller reports different departure and arrival
    dates, or when the raw difference is negative. Only single-day rollovers
    are accounted for.
    """
    duration = minutes_of_day(arrival_time) - minutes_of_day(departure_time)
    if crosses_midnight or duration < 0:
        duration += MINUTES_PER_DAY
    return duration
