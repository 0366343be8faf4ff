"""Pytest configuration and fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))


@pytest.fixture(autouse=True)
def _clean_flightboard_env(monkeypatch):
    """Keep a developer's .env or shell settings out of the tests."""
    for name in list(os.environ):
        if name.startswith("FLIGHTBOARD_"):
            monkeypatch.delenv(name, raising=False)
