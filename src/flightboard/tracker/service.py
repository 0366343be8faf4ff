"""Flight service - cache-aside refresh, validation, and query execution."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from tqdm import tqdm

from flightboard.config import CACHE_KEY, Settings
from flightboard.tracker.cache import CacheStore, MemoryCache
from flightboard.tracker.dates import forecast_window
from flightboard.tracker.errors import DateOutOfRangeError, RefreshExhaustionError, ValidationError
from flightboard.tracker.models import FlightQuery, FlightRecord, FlightType, QueryResult
from flightboard.tracker.sources.base import FlightSource
from flightboard.tracker.sources.flightstats import FlightStatsSource

logger = logging.getLogger(__name__)

# Arrivals first, then departures; the aggregate keeps this scan order.
FLIGHT_TYPES = (FlightType.ARRIVALS, FlightType.DEPARTURES)


def deduplicate(records: List[FlightRecord]) -> List[FlightRecord]:
    """Keep the first record per flight_id, preserving order."""
    seen = set()
    unique = []
    for record in records:
        if record.flight_id in seen:
            continue
        seen.add(record.flight_id)
        unique.append(record)
    return unique


def serialize_aggregate(records: List[FlightRecord]) -> str:
    return json.dumps([r.to_dict() for r in records])


def deserialize_aggregate(blob: str) -> List[FlightRecord]:
    """Parse a cached aggregate. Raises ValueError when the blob is not a list of records."""
    data = json.loads(blob)
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError("Cached aggregate is not a list of flight records")
    return [FlightRecord.from_dict(item) for item in data]


class FlightService:
    """Keeps the cached flight aggregate fresh and answers route/date queries."""

    def __init__(
        self,
        source: Optional[FlightSource] = None,
        cache: Optional[CacheStore] = None,
        settings: Optional[Settings] = None,
        today: Optional[Callable[[], date]] = None,
        progress: bool = False,
    ):
        self.settings = settings or Settings()
        self._source = source or FlightStatsSource(self.settings)
        self._cache = cache if cache is not None else MemoryCache()
        self._today = today or date.today
        self._progress = progress

    def window(self) -> List[date]:
        """Dates covered by the forecast window, starting today."""
        return forecast_window(self.settings.days_to_fetch, self._today)

    def refresh(self) -> List[FlightRecord]:
        """Rebuild the full aggregate for both boards and every window date, then cache it.

        An empty result (every slot failed) is not written, so an outage never
        replaces a good cached aggregate.
        """
        dates = self.window()
        jobs = [(t, d) for t in FLIGHT_TYPES for d in dates]
        results_by_job: Dict[Tuple[FlightType, date], List[FlightRecord]] = {}

        with ThreadPoolExecutor(max_workers=max(1, self.settings.max_workers)) as executor:
            future_to_job = {
                executor.submit(self._source.fetch_date, flight_type, d): (flight_type, d)
                for flight_type, d in jobs
            }
            for future in tqdm(
                as_completed(future_to_job),
                total=len(jobs),
                desc="Fetching flights",
                unit="board",
                disable=not self._progress,
            ):
                results_by_job[future_to_job[future]] = future.result()

        # Reassemble in scan order (type, then date)
        records: List[FlightRecord] = []
        for job in jobs:
            records.extend(results_by_job.get(job, []))

        if self.settings.deduplicate:
            before = len(records)
            records = deduplicate(records)
            logger.info("Dropped %d duplicate flights", before - len(records))

        if not records:
            logger.warning("Refresh produced no flights, keeping the previous cache entry")
            return records

        logger.info("Storing %d non-codeshare flights in cache", len(records))
        self._cache.put(CACHE_KEY, serialize_aggregate(records), self.settings.cache_ttl)
        return records

    def load_aggregate(self) -> Optional[List[FlightRecord]]:
        """Read the cached aggregate. None means a cache miss."""
        blob = self._cache.get(CACHE_KEY)
        if not blob:
            return None
        try:
            return deserialize_aggregate(blob)
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable cached aggregate: %s", e)
            return None

    def validate_query(
        self, origin: Optional[str], destination: Optional[str], flight_date: Union[str, date, None]
    ) -> FlightQuery:
        """Check query parameters and the forecast window. Performs no I/O."""
        missing = [
            name
            for name, value in (("origin", origin), ("destination", destination), ("date", flight_date))
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError(f"Missing required parameters: {', '.join(missing)}")

        codes = []
        for name, value in (("origin", origin), ("destination", destination)):
            code = str(value).strip().upper()
            if len(code) != 3 or not code.isalnum():
                raise ValidationError(f"Invalid {name} airport code: {value!r}")
            codes.append(code)

        if isinstance(flight_date, datetime):
            d = flight_date.date()
        elif isinstance(flight_date, date):
            d = flight_date
        else:
            try:
                d = datetime.strptime(str(flight_date).strip(), "%Y-%m-%d").date()
            except ValueError:
                raise ValidationError(f"Invalid date format: {flight_date!r}. Expected YYYY-MM-DD") from None

        dates = self.window()
        if not dates or not dates[0] <= d <= dates[-1]:
            first = dates[0] if dates else self._today()
            last = dates[-1] if dates else first
            raise DateOutOfRangeError(d, first, last)

        return FlightQuery(origin=codes[0], destination=codes[1], flight_date=d)

    def query(
        self, origin: Optional[str], destination: Optional[str], flight_date: Union[str, date, None]
    ) -> QueryResult:
        """Return cached flights for one route and departure date.

        A cache miss triggers at most one synchronous refresh; if the cache is
        still empty afterwards RefreshExhaustionError is raised.
        """
        query = self.validate_query(origin, destination, flight_date)
        logger.info("Searching flights: %s -> %s on %s", query.origin, query.destination, query.flight_date)

        records = self.load_aggregate()
        if records is None:
            logger.info("Cache miss, refreshing data...")
            self.refresh()
            records = self.load_aggregate()
            if records is None:
                raise RefreshExhaustionError("Flight data is temporarily unavailable")

        logger.debug("Total flights in cache: %d", len(records))
        flights = [r for r in records if query.matches(r)]
        logger.info("Found %d matching flights", len(flights))
        return QueryResult(flights=flights, query=query)

    def statistics(self, flights):
        """Compute statistics for the given flights."""
        from flightboard.tracker.stats import compute_stats

        return compute_stats(flights)
