"""Reference data lookups for airline codes."""

from flightboard.reference.airlines import ICAO_TO_IATA, logo_url, normalize_carrier_code

__all__ = [
    "ICAO_TO_IATA",
    "logo_url",
    "normalize_carrier_code",
]
