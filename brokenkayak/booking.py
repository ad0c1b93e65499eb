"""Booking system facade.

Owns one client directory and one flight network and answers the text queries of the booking
driver: client lookup, direct flights on a date, and itineraries in discovery, cost or time order.
Instances are independent, so several systems (or tests) never share state.
"""
import logging
from datetime import date, datetime
from pathlib import Path

from .directory import ClientDirectory
from .formatting import format_client, format_flight, format_itineraries
from .loaders import load_clients, load_flights, parse_date
from .network import FlightNetwork
from .processing.ranking import ItineraryRanker, SortOrder
from .processing.search import ItinerarySearchEngine, SearchResult

logger = logging.getLogger(__name__)


def parse_query_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


class BookingSystem:
    def __init__(
            self,
            network: FlightNetwork | None = None,
            clients: ClientDirectory | None = None,
            engine: ItinerarySearchEngine | None = None,
            ranker: ItineraryRanker | None = None,
    ):
        self.network = network if network is not None else FlightNetwork()
        self.clients = clients if clients is not None else ClientDirectory()
        self.engine = engine if engine is not None else ItinerarySearchEngine(self.network)
        self.ranker = ranker if ranker is not None else ItineraryRanker()

    # ---------------- ingestion -----------------
    def upload_clients(self, path: str | Path) -> int:
        added = self.clients.add_clients(load_clients(path))
        logger.info("Directory now holds %d clients", len(self.clients))
        return added

    def upload_flights(self, path: str | Path) -> int:
        added = self.network.add_flights(load_flights(path))
        logger.info("Network now holds %d flights between %d airports", len(self.network), len(self.network.airports()))
        return added

    # ---------------- queries -----------------
    def get_client(self, email: str) -> str:
        return format_client(self.clients.get(email))

    def get_flights(self, day: date | str, origin: str, destination: str) -> str:
        flights = self.network.flights_on(parse_query_date(day), origin, destination)
        return "".join(f"{format_flight(f)}\n" for f in flights)

    def search(self, day: date | str, origin: str, destination: str) -> SearchResult:
        return self.engine.search(parse_query_date(day), origin, destination)

    def get_itineraries(self, day: date | str, origin: str, destination: str) -> str:
        return format_itineraries(self.search(day, origin, destination), separated=True)

    def get_sorted_itineraries(self, day: date | str, origin: str, destination: str, order: SortOrder) -> str:
        result = self.search(day, origin, destination)
        return format_itineraries(self.ranker.rank(result, order))

    def get_itineraries_sorted_by_cost(self, day: date | str, origin: str, destination: str) -> str:
        return self.get_sorted_itineraries(day, origin, destination, SortOrder.COST)

    def get_itineraries_sorted_by_time(self, day: date | str, origin: str, destination: str) -> str:
        return self.get_sorted_itineraries(day, origin, destination, SortOrder.TIME)
