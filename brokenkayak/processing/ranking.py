import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from ..models import Itinerary

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    COST = 'cost'
    TIME = 'time'


class ItineraryRanker:
    """Order itineraries by exact total price or exact total duration, non-decreasing.

    Sorting is stable, so ties keep the order they were discovered in. Inputs are never mutated.
    """

    _KEYS: dict[SortOrder, Callable[[Itinerary], Any]] = {
        SortOrder.COST: lambda it: it.total_price,
        SortOrder.TIME: lambda it: it.total_duration,
    }

    def rank(self, itineraries: Iterable[Itinerary], order: SortOrder) -> list[Itinerary]:
        ranked = sorted(itineraries, key=self._KEYS[SortOrder(order)])
        logger.debug("Ranked %d itineraries by %s", len(ranked), SortOrder(order).value)
        return ranked

    def sort_by_cost(self, itineraries: Iterable[Itinerary]) -> list[Itinerary]:
        return self.rank(itineraries, SortOrder.COST)

    def sort_by_time(self, itineraries: Iterable[Itinerary]) -> list[Itinerary]:
        return self.rank(itineraries, SortOrder.TIME)
