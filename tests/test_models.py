"""Unit tests for models and statistics."""

from datetime import date

import pytest

from flightboard.tracker.models import FlightQuery, FlightRecord, QueryResult, RawFlightEntry
from flightboard.tracker.stats import compute_stats


def _record(**overrides) -> FlightRecord:
    fields = dict(
        flight_id="VY3905_2024-03-10",
        origin_iata="PMI",
        destination_iata="BCN",
        origin_name="Palma de Mallorca",
        destination_name="Barcelona",
        departure="08:00",
        arrival="08:50",
        departure_date="2024-03-10",
        arrival_date="2024-03-10",
        duration=50,
        company="Vueling",
        company_logo="https://example.invalid/VY.png",
        flight="VY3905",
    )
    fields.update(overrides)
    return FlightRecord(**fields)


class TestRawFlightEntry:
    """Tests for RawFlightEntry.from_dict."""

    def test_from_dict(self) -> None:
        e = RawFlightEntry.from_dict({
            "carrier": {"fs": "VLG", "name": "Vueling", "flightNumber": 3905},
            "departureTime": {"time24": "08:00"},
            "arrivalTime": {"time24": "08:50"},
            "airport": {"fs": "BCN", "city": "Barcelona"},
            "operatedBy": None,
            "isCodeshare": False,
        })
        assert e.carrier_code == "VLG"
        assert e.flight_number == "3905"
        assert e.airport_city == "Barcelona"
        assert e.is_codeshare is False
        assert e.operated_by is None

    def test_missing_codeshare_flag_defaults_false(self) -> None:
        e = RawFlightEntry.from_dict({
            "carrier": {"fs": "VY", "flightNumber": "1"},
            "departureTime": {"time24": "08:00"},
            "arrivalTime": {"time24": "08:50"},
            "airport": {"fs": "BCN"},
        })
        assert e.is_codeshare is False
        assert e.carrier_name == ""

    def test_missing_structure_raises(self) -> None:
        with pytest.raises(KeyError):
            RawFlightEntry.from_dict({"carrier": {"fs": "VY"}})


class TestFlightRecord:
    """Tests for FlightRecord."""

    def test_dict_round_trip(self) -> None:
        r = _record()
        assert FlightRecord.from_dict(r.to_dict()) == r

    def test_from_dict_ignores_unknown_keys(self) -> None:
        data = _record().to_dict()
        data["extra"] = "ignored"
        assert FlightRecord.from_dict(data) == _record()

    def test_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            _record().duration = 1  # type: ignore[misc]

    def test_route(self) -> None:
        assert _record().route() == "PMI-BCN"


class TestFlightQuery:
    """Tests for FlightQuery.matches."""

    def test_exact_match(self) -> None:
        q = FlightQuery("PMI", "BCN", date(2024, 3, 10))
        assert q.matches(_record())
        assert not q.matches(_record(destination_iata="MAD"))
        assert not q.matches(_record(origin_iata="BCN", destination_iata="PMI"))
        assert not q.matches(_record(departure_date="2024-03-11"))


class TestQueryResult:
    """Tests for QueryResult."""

    def test_to_dict(self) -> None:
        body = QueryResult(flights=[_record()]).to_dict()
        assert body["totalFlights"] == 1
        assert body["flights"][0]["flight"] == "VY3905"

    def test_to_dataframe_empty(self) -> None:
        df = QueryResult(flights=[]).to_dataframe()
        assert len(df) == 0
        assert "flight_id" in df.columns

    def test_to_dataframe_with_flights(self) -> None:
        df = QueryResult(flights=[_record()]).to_dataframe()
        assert len(df) == 1
        assert df.iloc[0]["origin_iata"] == "PMI"
        assert df.iloc[0]["destination_iata"] == "BCN"


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty(self) -> None:
        stats = compute_stats([])
        assert stats.total_flights == 0
        assert stats.carriers.empty
        assert list(stats.carriers.columns) == ["company", "flights", "avg_duration"]

    def test_per_carrier_and_hour(self) -> None:
        flights = [
            _record(),
            _record(flight_id="FR1_2024-03-10", company="Ryanair", departure="08:45", duration=70),
            _record(flight_id="FR2_2024-03-11", company="Ryanair", departure="23:10",
                    departure_date="2024-03-11", arrival_date="2024-03-12",
                    destination_iata="STN", duration=120),
        ]
        stats = compute_stats(flights)
        assert stats.total_flights == 3
        assert stats.overnight_flights == 1
        assert stats.by_hour == {8: 2, 23: 1}
        assert stats.average_duration == pytest.approx(80.0)
        # Busiest carrier first
        assert list(stats.carriers["company"]) == ["Ryanair", "Vueling"]
        assert list(stats.carriers["flights"]) == [2, 1]
        assert list(stats.carriers["avg_duration"]) == pytest.approx([95.0, 50.0])
