"""CLI for querying and refreshing the cached flight board."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import schedule

from flightboard.config import Settings
from flightboard.logging_config import setup_logging
from flightboard.tracker.cache import FileCache
from flightboard.tracker.errors import (
    CacheUnavailableError,
    DateOutOfRangeError,
    RefreshExhaustionError,
    ValidationError,
)
from flightboard.tracker.service import FlightService

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".cache" / "flightboard"

EXIT_INVALID = 1
EXIT_OUT_OF_RANGE = 2
EXIT_UNAVAILABLE = 3
EXIT_CACHE = 4
EXIT_INTERNAL = 5


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scheduled flights for one airport, scraped from FlightStats"
    )
    parser.add_argument("--log-level", default=None, help="Override FLIGHTBOARD_LOG_LEVEL")
    parser.add_argument(
        "--cache-dir",
        default=None,
        help=f"Cache directory (default: FLIGHTBOARD_CACHE_DIR or {DEFAULT_CACHE_DIR})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    q = sub.add_parser("query", help="Find flights for a route and departure date")
    q.add_argument("--origin", "-o", required=True, help="Origin IATA code (e.g. PMI)")
    q.add_argument("--destination", "-d", required=True, help="Destination IATA code (e.g. BCN)")
    q.add_argument("--date", required=True, help="Departure date (YYYY-MM-DD)")
    q.add_argument("--json", action="store_true", help="Print the JSON response body")
    q.add_argument("--stats", "-s", action="store_true", help="Include statistics summary")
    q.add_argument("--output", help="Write results to CSV file")

    sub.add_parser("refresh", help="Rebuild the cached flight data now")

    s = sub.add_parser("schedule", help="Refresh now and then periodically")
    s.add_argument("--every", type=int, default=60, help="Minutes between refreshes (default: 60)")
    return parser


def _print_stats(stats) -> None:
    print(f"\nTotal flights: {stats.total_flights}")
    print(f"Overnight flights: {stats.overnight_flights}")
    if not stats.carriers.empty:
        print("\nBy airline:")
        for row in stats.carriers.itertuples(index=False):
            print(f"  {row.company}: {row.flights} flights, avg {row.avg_duration:.0f} min")
    if stats.by_hour:
        print("\nBy departure hour:")
        for hour, count in sorted(stats.by_hour.items()):
            print(f"  {hour:02d}: {count}")
    print(f"\nAverage duration: {stats.average_duration:.0f} min")
    print()


def run_query(service: FlightService, args) -> int:
    result = service.query(args.origin, args.destination, args.date)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    if args.stats:
        _print_stats(service.statistics(result.flights))

    df = result.to_dataframe()
    if df.empty:
        print("No flights found.", file=sys.stderr)
    else:
        print(df.to_string(index=False))

    if args.output and not df.empty:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)
    return 0


def run_refresh(service: FlightService) -> int:
    records = service.refresh()
    print(f"Refreshed {len(records)} flights", file=sys.stderr)
    return 0


def run_schedule(service: FlightService, every: int) -> int:
    def _run() -> None:
        try:
            service.refresh()
        except Exception:  # noqa: BLE001
            logger.exception("Scheduled refresh failed")

    logger.info("Scheduler started - refreshing every %d minutes", every)
    _run()
    schedule.every(every).minutes.do(_run)
    while True:
        schedule.run_pending()
        time.sleep(1)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        setup_logging(args.log_level or settings.log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    cache_dir = Path(args.cache_dir) if args.cache_dir else settings.cache_dir or DEFAULT_CACHE_DIR
    service = FlightService(
        cache=FileCache(cache_dir),
        settings=settings,
        progress=sys.stderr.isatty(),
    )

    try:
        if args.command == "query":
            return run_query(service, args)
        if args.command == "refresh":
            return run_refresh(service)
        return run_schedule(service, args.every)
    except DateOutOfRangeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_OUT_OF_RANGE
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID
    except RefreshExhaustionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except CacheUnavailableError as e:
        logger.error("Cache unavailable: %s", e)
        return EXIT_CACHE
    except Exception:  # noqa: BLE001
        logger.exception("Internal error")
        return EXIT_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
