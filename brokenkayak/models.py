from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from .errors import ConstraintViolation

CENT = Decimal('0.01')


@dataclass(frozen=True, slots=True)
class FlightRecord:
    """Single scheduled flight leg as ingested from the flights file.

    origin / destination are airport codes; price is kept as an exact Decimal quantized to cents.
    """
    number: str
    departure: datetime
    arrival: datetime
    airline: str
    origin: str
    destination: str
    price: Decimal

    def __post_init__(self) -> None:
        if self.arrival < self.departure:
            raise ConstraintViolation(
                f"Flight {self.number} arrives ({self.arrival}) before it departs ({self.departure})"
            )
        price = Decimal(self.price)
        if not price.is_finite():
            raise ConstraintViolation(f"Flight {self.number} has non-finite price {price}")
        if price < 0:
            raise ConstraintViolation(f"Flight {self.number} has negative price {price}")
        if price != price.quantize(CENT):
            raise ConstraintViolation(f"Flight {self.number} price {price} has more than two decimal places")
        object.__setattr__(self, 'price', price.quantize(CENT))

    @property
    def duration(self) -> timedelta:
        return self.arrival - self.departure


@dataclass(frozen=True, slots=True)
class ClientRecord:
    """Client identity/contact/payment data; everything except email is passed through untouched."""
    last_name: str
    first_names: str
    email: str
    address: str
    credit_card_number: str
    expiry_date: date


@dataclass(frozen=True, slots=True)
class Itinerary:
    """Chain of connecting legs.

    Each leg departs from the airport the previous one landed at, never before it landed.
    The upper bound on the layover is a search policy and is enforced by the search engine.
    """
    legs: tuple[FlightRecord, ...]

    def __post_init__(self) -> None:
        legs = tuple(self.legs)
        if not legs:
            raise ConstraintViolation("Itinerary needs at least one leg")
        for prev, nxt in zip(legs, legs[1:]):
            if prev.destination != nxt.origin:
                raise ConstraintViolation(
                    f"Leg {nxt.number} departs {nxt.origin} but {prev.number} lands at {prev.destination}"
                )
            if nxt.departure < prev.arrival:
                raise ConstraintViolation(f"Leg {nxt.number} departs before {prev.number} arrives")
        object.__setattr__(self, 'legs', legs)

    @property
    def origin(self) -> str:
        return self.legs[0].origin

    @property
    def destination(self) -> str:
        return self.legs[-1].destination

    @property
    def departure_date(self) -> date:
        return self.legs[0].departure.date()

    @property
    def total_price(self) -> Decimal:
        return sum((leg.price for leg in self.legs), Decimal('0')).quantize(CENT)

    @property
    def total_duration(self) -> timedelta:
        return self.legs[-1].arrival - self.legs[0].departure

    @property
    def layovers(self) -> list[timedelta]:
        return [nxt.departure - prev.arrival for prev, nxt in zip(self.legs, self.legs[1:])]

    def __len__(self) -> int:
        return len(self.legs)
