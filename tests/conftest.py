"""Shared fixtures and helpers for the itinerary search tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from brokenkayak.config import settings
from brokenkayak.models import FlightRecord, Itinerary
from brokenkayak.network import FlightNetwork


@pytest.fixture(autouse=True)
def _no_progress_bars(monkeypatch):
    monkeypatch.setattr(settings, "show_progress", False)


def dt(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d %H:%M")


@pytest.fixture
def make_flight():
    """Factory fixture for FlightRecord instances with terse string arguments."""
    counter = iter(range(1, 10_000))

    def _make(
        origin: str,
        destination: str,
        departure: str,
        arrival: str,
        price: str = "100.00",
        number: str | None = None,
        airline: str = "Kayak Air",
    ) -> FlightRecord:
        return FlightRecord(
            number=number or f"KA{next(counter):03d}",
            departure=dt(departure),
            arrival=dt(arrival),
            airline=airline,
            origin=origin,
            destination=destination,
            price=Decimal(price),
        )

    return _make


@pytest.fixture
def network():
    return FlightNetwork()


def assert_valid_itinerary(itinerary: Itinerary, origin: str, destination: str, max_layover_hours: float = 6) -> None:
    """Check chaining and the layover window for every adjacent leg pair."""
    legs = itinerary.legs
    assert legs, "Itinerary has no legs"
    assert legs[0].origin == origin
    assert legs[-1].destination == destination
    for prev, nxt in zip(legs, legs[1:]):
        assert prev.destination == nxt.origin, f"{prev.number} -> {nxt.number} not chained"
        gap = (nxt.departure - prev.arrival).total_seconds()
        assert 0 <= gap <= max_layover_hours * 3600, f"Bad layover {gap}s between {prev.number} and {nxt.number}"
