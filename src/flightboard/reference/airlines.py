"""Airline code canonicalization (ICAO 3-letter to IATA 2-letter)."""

import json
import re
from importlib import resources
from types import MappingProxyType
from typing import Mapping

LOGO_URL = "https://cdn.jsdelivr.net/gh/spydogenesis/airlines-logo@latest/airlines-logo/200x200_v2/{code}.png"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")

# Manual overrides for carriers missing from the bundled table (preserved across data updates)
_ICAO_OVERRIDES: dict[str, str] = {
    "ITY": "AZ",
    "SJX": "JX",
    "TGW": "TR",
}


def _load_icao_to_iata() -> Mapping[str, str]:
    try:
        data_path = resources.files("flightboard.reference.data").joinpath("airlines.json")
        with data_path.open() as f:
            table = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        table = {}
    return MappingProxyType({**table, **_ICAO_OVERRIDES})


# Loaded once at import; read-only for the life of the process.
ICAO_TO_IATA: Mapping[str, str] = _load_icao_to_iata()


def normalize_carrier_code(code: str) -> str:
    """Strip non-alphanumerics and map ICAO-style codes onto their IATA equivalent.

    Codes of two characters or fewer pass through. Longer codes that are not
    in the table are returned stripped but otherwise unchanged.
    """
    cleaned = _NON_ALNUM.sub("", code or "")
    if len(cleaned) > 2:
        return ICAO_TO_IATA.get(cleaned, cleaned)
    return cleaned


def logo_url(code: str) -> str:
    """Logo image for an already normalized carrier code."""
    return LOGO_URL.format(code=code)
