import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..config import settings
from ..errors import NotFoundError
from ..models import FlightRecord, Itinerary
from ..network import FlightNetwork

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResult:
    """Itineraries found for one (date, origin, destination) query, in discovery order.

    Positions are 1-based, matching how results are numbered for the caller.
    """
    day: date
    origin: str
    destination: str
    itineraries: list[Itinerary] = field(default_factory=list)

    def get(self, position: int) -> Itinerary:
        if not 1 <= position <= len(self.itineraries):
            raise NotFoundError(f"No itinerary at position {position} (have {len(self.itineraries)})")
        return self.itineraries[position - 1]

    def by_position(self) -> dict[int, Itinerary]:
        return dict(enumerate(self.itineraries, start=1))

    def __len__(self) -> int:
        return len(self.itineraries)

    def __iter__(self) -> Iterator[Itinerary]:
        return iter(self.itineraries)


class ItinerarySearchEngine:
    """Enumerate every connecting itinerary between two airports for a departure date.

    Depth-first over the network with an explicit stack. The first leg must depart on the
    requested date; each following leg must leave from the previous leg's destination between
    0 and ``max_layover`` after it lands, both ends inclusive. An airport is visited at most
    once per path, which bounds the depth and makes cyclic networks safe. Reaching the
    destination emits an itinerary without ending the search along that path.
    """

    def __init__(self, network: FlightNetwork, max_layover: timedelta | None = None):
        self.network = network
        self.max_layover = settings.max_layover if max_layover is None else max_layover
        if self.max_layover < timedelta(0):
            raise ValueError(f"max_layover must not be negative, got {self.max_layover}")

    # ---------------- helpers -----------------
    def _seeds(self, day: date, origin: str) -> Iterator[FlightRecord]:
        for bucket in self.network.flights_from(origin).values():
            for flight in bucket:
                if flight.departure.date() == day:
                    yield flight

    def _is_valid_connection(self, arriving: FlightRecord, departing: FlightRecord) -> bool:
        return timedelta(0) <= departing.departure - arriving.arrival <= self.max_layover

    def _connections(self, leg: FlightRecord, visited: set[str]) -> Iterator[FlightRecord]:
        # visited is read lazily; deeper levels restore it before this generator resumes.
        for dest, bucket in self.network.flights_from(leg.destination).items():
            if dest in visited:
                continue
            for flight in bucket:
                if self._is_valid_connection(leg, flight):
                    yield flight

    # ---------------- public API -----------------
    def iter_itineraries(self, day: date, origin: str, destination: str) -> Iterator[Itinerary]:
        for seed in self._seeds(day, origin):
            if seed.destination == destination:
                yield Itinerary((seed,))
            if seed.origin == seed.destination:
                # self-loops only ever stand alone
                continue

            path = [seed]
            visited = {seed.origin, seed.destination}
            stack = [self._connections(seed, visited)]
            while stack:
                flight = next(stack[-1], None)
                if flight is None:
                    stack.pop()
                    visited.discard(path.pop().destination)
                    continue
                path.append(flight)
                visited.add(flight.destination)
                if flight.destination == destination:
                    yield Itinerary(tuple(path))
                stack.append(self._connections(flight, visited))

    def search(self, day: date, origin: str, destination: str) -> SearchResult:
        result = SearchResult(day, origin, destination, list(self.iter_itineraries(day, origin, destination)))
        logger.debug("Found %d itineraries %s -> %s on %s", len(result), origin, destination, day)
        return result
