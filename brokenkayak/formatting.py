"""Plain-text rendering of records and itineraries.

Lines are comma separated in ingestion field order. Date-times use ``YYYY-MM-DD HH:MM``, prices
two decimals, durations ``HH:MM`` truncated to whole minutes with hours never wrapped at 24.
"""
from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from .models import CENT, ClientRecord, FlightRecord, Itinerary

DATETIME_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"


def format_datetime(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def format_price(value: Decimal) -> str:
    return f"{value.quantize(CENT):.2f}"


def format_duration(value: timedelta) -> str:
    total_minutes = int(value.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def format_client(client: ClientRecord) -> str:
    return ",".join([
        client.last_name,
        client.first_names,
        client.email,
        client.address,
        client.credit_card_number,
        client.expiry_date.strftime(DATE_FORMAT),
    ])


def format_leg(flight: FlightRecord) -> str:
    return ",".join([
        flight.number,
        format_datetime(flight.departure),
        format_datetime(flight.arrival),
        flight.airline,
        flight.origin,
        flight.destination,
    ])


def format_flight(flight: FlightRecord) -> str:
    return f"{format_leg(flight)},{format_price(flight.price)}"


def format_itinerary(itinerary: Itinerary) -> str:
    lines = [format_leg(leg) for leg in itinerary.legs]
    lines.append(format_price(itinerary.total_price))
    lines.append(format_duration(itinerary.total_duration))
    return "".join(f"{line}\n" for line in lines)


def format_itineraries(itineraries: Iterable[Itinerary], separated: bool = False) -> str:
    """Concatenate itinerary blocks; ``separated`` puts a blank line between consecutive blocks."""
    blocks = [format_itinerary(it) for it in itineraries]
    return ("\n" if separated else "").join(blocks)
