"""FlightStats flight tracker scraper.

The tracker has no public API. Each board page (arrivals or departures for
one airport, date and hour) embeds its data as a Next.js script assignment:

    __NEXT_DATA__ = {...};__NEXT_LOADED_PAGES__

The flights live under props.initialState.flightTracker.route.flights.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import requests

from flightboard.config import HTML_END_MARKER, HTML_START_MARKER, Settings
from flightboard.tracker.errors import ExtractionError, MalformedPayloadError, TransientSourceError
from flightboard.tracker.models import FlightRecord, FlightType, RawFlightEntry
from flightboard.tracker.transform import transform_entry

logger = logging.getLogger(__name__)


def build_url(base_url: str, flight_type: FlightType, airport: str, day: date, hour: int) -> str:
    """Board page URL for one airport, date and hour slot."""
    return (
        f"{base_url}/{FlightType(flight_type).value}/{airport}/"
        f"?year={day.year}&month={day.month}&date={day.day}&hour={hour}"
    )


def extract_json(html: str, start_marker: str, end_marker: str) -> Any:
    """Parse the JSON text found strictly between two literal markers."""
    start = html.find(start_marker)
    end = html.find(end_marker)
    if start == -1 or end == -1:
        raise ExtractionError("Could not find flight data in the page")
    start += len(start_marker)
    if end < start:
        raise ExtractionError("Flight data markers are out of order")
    try:
        return json.loads(html[start:end])
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Embedded flight data is not valid JSON: {e}") from e


def flights_from_payload(payload: Any) -> List[Dict[str, Any]]:
    """Return the raw flight list from a page payload."""
    try:
        flights = payload["props"]["initialState"]["flightTracker"]["route"]["flights"]
    except (KeyError, TypeError) as e:
        raise MalformedPayloadError(f"Flight list missing from payload: {e!r}") from e
    if flights is None:
        return []
    if not isinstance(flights, list):
        raise MalformedPayloadError(f"Flight list has unexpected type {type(flights).__name__}")
    return flights


class FlightStatsSource:
    """Flight data source scraping the FlightStats airport boards."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def fetch_slot(self, flight_type: FlightType, flight_date: date, hour: int) -> List[FlightRecord]:
        """Fetch one board page and return its non-codeshare flights.

        Any HTTP or page format problem yields an empty list for this slot only.
        """
        url = build_url(self.settings.base_url, flight_type, self.settings.airport, flight_date, hour)
        try:
            resp = requests.get(url, headers=self.settings.headers, timeout=self.settings.timeout)
        except requests.RequestException as e:
            logger.warning("Request failed for %s: %s", url, e)
            return []
        if not resp.ok:
            logger.warning("HTTP error %s for URL: %s", resp.status_code, url)
            return []

        try:
            payload = extract_json(resp.text, HTML_START_MARKER, HTML_END_MARKER)
            items = flights_from_payload(payload)
        except TransientSourceError as e:
            logger.warning("Error processing data from %s: %s", url, e)
            return []

        entries = self._parse_entries(items, url)
        records = [
            transform_entry(
                entry,
                FlightType(flight_type),
                flight_date,
                self.settings.airport,
                self.settings.airport_name,
            )
            for entry in entries
            if not entry.is_codeshare
        ]
        logger.debug("%s %s %02d:00 -> %d flights", flight_type, flight_date, hour, len(records))
        return records

    def _parse_entries(self, items: Iterable[Any], url: str) -> List[RawFlightEntry]:
        entries = []
        for item in items:
            try:
                entries.append(RawFlightEntry.from_dict(item))
            except (KeyError, TypeError) as e:
                logger.debug("Skipping unparseable entry from %s: %r", url, e)
        return entries

    def fetch_date(self, flight_type: FlightType, flight_date: date) -> List[FlightRecord]:
        """Fetch all time slots for one date concurrently and concatenate in slot order."""
        slots = list(self.settings.time_slots)
        if not slots:
            return []
        with ThreadPoolExecutor(max_workers=len(slots)) as executor:
            results = list(
                executor.map(lambda hour: self.fetch_slot(flight_type, flight_date, hour), slots)
            )
        return [record for slot_records in results for record in slot_records]
