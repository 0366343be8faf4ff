"""Scheduled flights for one airport, scraped from FlightStats and cached."""

__version__ = "0.1.0"
