"""Exception hierarchy for the flight tracker."""


class FlightboardError(Exception):
    """Base class for all flightboard errors."""


class TransientSourceError(FlightboardError):
    """A single scrape slot could not be turned into flight entries."""


class ExtractionError(TransientSourceError):
    """The embedded JSON payload markers were not found in the page."""


class MalformedPayloadError(TransientSourceError):
    """The embedded payload was found but is not the expected JSON."""


class ValidationError(FlightboardError, ValueError):
    """Query parameters are missing or malformed."""


class DateOutOfRangeError(ValidationError):
    """Query date lies outside the forecast window."""

    def __init__(self, flight_date, first, last):
        self.flight_date = flight_date
        self.first = first
        self.last = last
        super().__init__(
            f"Date {flight_date} is outside the forecast window {first} to {last}"
        )


class CacheUnavailableError(FlightboardError):
    """The cache store could not be read or written."""


class RefreshExhaustionError(FlightboardError):
    """The cache is still empty after a forced refresh."""
