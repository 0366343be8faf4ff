"""Turn raw scraped entries into canonical flight records."""

from datetime import date
from enum import Enum
from typing import Tuple

from flightboard.reference.airlines import logo_url, normalize_carrier_code
from flightboard.tracker.dates import (
    calculate_duration,
    format_date,
    is_overnight,
    next_day,
    previous_day,
)
from flightboard.tracker.models import FlightRecord, FlightType, RawFlightEntry


class RolloverCase(Enum):
    """How a scraped page's calendar day relates to the flight's real dates.

    The site anchors each page to one local calendar day, so flights landing
    shortly after midnight or late in the evening are listed on a neighbouring
    day's page.
    """

    EARLY_MORNING_ARRIVAL = "early_morning_arrival"
    LATE_NIGHT_ARRIVAL = "late_night_arrival"
    OVERNIGHT_DEPARTURE = "overnight_departure"
    SAME_DAY = "same_day"


def classify_rollover(flight_type: FlightType, departure_time: str, arrival_time: str) -> RolloverCase:
    """Pick the rollover case for one flight from its HH:MM clock times."""
    if flight_type == FlightType.ARRIVALS:
        if "00:00" <= arrival_time <= "06:00":
            return RolloverCase.EARLY_MORNING_ARRIVAL
        if "22:00" <= arrival_time <= "23:59":
            return RolloverCase.LATE_NIGHT_ARRIVAL
        return RolloverCase.SAME_DAY
    if is_overnight(departure_time, arrival_time):
        return RolloverCase.OVERNIGHT_DEPARTURE
    return RolloverCase.SAME_DAY


def resolve_dates(case: RolloverCase, anchor: date) -> Tuple[date, date]:
    """Return (departure_date, arrival_date) for a rollover case."""
    if case is RolloverCase.EARLY_MORNING_ARRIVAL:
        return previous_day(anchor), anchor
    if case is RolloverCase.LATE_NIGHT_ARRIVAL:
        return previous_day(anchor), previous_day(anchor)
    if case is RolloverCase.OVERNIGHT_DEPARTURE:
        return anchor, next_day(anchor)
    return anchor, anchor


def transform_entry(
    entry: RawFlightEntry,
    flight_type: FlightType,
    anchor: date,
    airport: str,
    airport_name: str,
) -> FlightRecord:
    """Convert one RawFlightEntry scraped from the page for `anchor` into a FlightRecord."""
    departure_time = entry.departure_time
    arrival_time = entry.arrival_time

    case = classify_rollover(flight_type, departure_time, arrival_time)
    departure_date, arrival_date = resolve_dates(case, anchor)

    if flight_type == FlightType.DEPARTURES:
        origin, origin_name = airport, airport_name
        destination, destination_name = entry.airport_code, entry.airport_city
    else:
        origin, origin_name = entry.airport_code, entry.airport_city
        destination, destination_name = airport, airport_name

    carrier = normalize_carrier_code(entry.carrier_code)
    flight_code = f"{carrier}{entry.flight_number}"

    return FlightRecord(
        flight_id=f"{flight_code}_{format_date(departure_date)}",
        origin_iata=origin,
        destination_iata=destination,
        origin_name=origin_name,
        destination_name=destination_name,
        departure=departure_time,
        arrival=arrival_time,
        departure_date=format_date(departure_date),
        arrival_date=format_date(arrival_date),
        duration=calculate_duration(departure_time, arrival_time, departure_date != arrival_date),
        company=entry.carrier_name,
        company_logo=logo_url(carrier),
        flight=flight_code,
    )
