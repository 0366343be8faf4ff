"""Configuration utilities.

Central place for environment driven settings (scrape target, airport,
forecast window, cache). Values are read from the process environment after
loading a local .env file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()

BASE_URL = "https://www.flightstats.com/v2/flight-tracker"

HTML_START_MARKER = "__NEXT_DATA__ = "
HTML_END_MARKER = ";__NEXT_LOADED_PAGES__"

CACHE_KEY = "all_flights_data"

HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Cache-Control": "max-age=0",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _slots_env(name: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        slots = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise ValueError(f"{name} must be a comma separated list of hours, got {raw!r}") from None
    if not slots or any(h < 0 or h > 23 for h in slots):
        raise ValueError(f"{name} hours must be between 0 and 23, got {raw!r}")
    return slots


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    base_url: str = BASE_URL
    airport: str = "PMI"
    airport_name: str = "Palma de Mallorca"
    time_slots: Tuple[int, ...] = (0, 6, 12, 18)
    days_to_fetch: int = 4
    cache_ttl: int = 60 * 60 * 3
    cache_dir: Optional[Path] = None
    timeout: int = 30
    max_workers: int = 8
    deduplicate: bool = False
    log_level: str = "INFO"
    headers: Dict[str, str] = field(default_factory=lambda: dict(HEADERS))

    @classmethod
    def from_env(cls) -> "Settings":
        cache_dir = os.getenv("FLIGHTBOARD_CACHE_DIR")
        return cls(
            base_url=os.getenv("FLIGHTBOARD_BASE_URL", BASE_URL),
            airport=os.getenv("FLIGHTBOARD_AIRPORT", "PMI").upper(),
            airport_name=os.getenv("FLIGHTBOARD_AIRPORT_NAME", "Palma de Mallorca"),
            time_slots=_slots_env("FLIGHTBOARD_TIME_SLOTS", (0, 6, 12, 18)),
            days_to_fetch=_int_env("FLIGHTBOARD_DAYS", 4),
            cache_ttl=_int_env("FLIGHTBOARD_CACHE_TTL", 60 * 60 * 3),
            cache_dir=Path(cache_dir) if cache_dir else None,
            timeout=_int_env("FLIGHTBOARD_TIMEOUT", 30),
            max_workers=_int_env("FLIGHTBOARD_MAX_WORKERS", 8),
            deduplicate=_bool_env("FLIGHTBOARD_DEDUPLICATE", False),
            log_level=os.getenv("FLIGHTBOARD_LOG_LEVEL", "INFO"),
        )
