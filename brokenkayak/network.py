import logging
import threading
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from types import MappingProxyType
from typing import TypeAlias

from .models import FlightRecord

logger = logging.getLogger(__name__)

Buckets: TypeAlias = dict[str, dict[str, list[FlightRecord]]]

_NO_FLIGHTS: Mapping[str, tuple[FlightRecord, ...]] = MappingProxyType({})


class FlightNetwork:
    """Flights indexed by origin airport, then destination airport.

    Buckets keep ingestion order. Lookups of unknown airports return empty results.
    Writes are serialized; reads are lock-free and expect no concurrent ingestion.
    """

    def __init__(self, flights: Iterable[FlightRecord] = ()):
        self._adjacency: Buckets = defaultdict(dict)
        self._size = 0
        self._write_lock = threading.Lock()
        self.add_flights(flights)

    # ---------------- writes -----------------
    def add_flight(self, record: FlightRecord) -> None:
        with self._write_lock:
            self._insert(record)

    def add_flights(self, records: Iterable[FlightRecord]) -> int:
        added = 0
        with self._write_lock:
            for record in records:
                self._insert(record)
                added += 1
        if added:
            logger.debug("Added %d flights, network now holds %d", added, self._size)
        return added

    def _insert(self, record: FlightRecord) -> None:
        self._adjacency[record.origin].setdefault(record.destination, []).append(record)
        self._size += 1

    # ---------------- reads -----------------
    def flights_between(self, origin: str, destination: str) -> list[FlightRecord]:
        destinations = self._adjacency.get(origin)
        if destinations is None:
            return []
        return list(destinations.get(destination, ()))

    def flights_from(self, origin: str) -> Mapping[str, tuple[FlightRecord, ...]]:
        """Read-only destination -> flights snapshot, buckets as tuples."""
        destinations = self._adjacency.get(origin)
        if destinations is None:
            return _NO_FLIGHTS
        return MappingProxyType({dest: tuple(bucket) for dest, bucket in destinations.items()})

    def flights_on(self, day: date, origin: str, destination: str) -> list[FlightRecord]:
        return [f for f in self.flights_between(origin, destination) if f.departure.date() == day]

    def airports(self) -> set[str]:
        codes = set(self._adjacency)
        for destinations in self._adjacency.values():
            codes.update(destinations)
        return codes

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[FlightRecord]:
        for destinations in self._adjacency.values():
            for bucket in destinations.values():
                yield from bucket

    def __contains__(self, record: object) -> bool:
        if not isinstance(record, FlightRecord):
            return False
        return record in self._adjacency.get(record.origin, {}).get(record.destination, ())
