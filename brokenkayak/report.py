from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .formatting import format_datetime, format_duration, format_price
from .models import Itinerary
from .processing.search import SearchResult

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'


def _itinerary_context(position: int, itinerary: Itinerary) -> dict:
    return {
        'position': position,
        'total_price': format_price(itinerary.total_price),
        'total_duration': format_duration(itinerary.total_duration),
        'stops': len(itinerary) - 1,
        'legs': [
            {
                'number': leg.number,
                'airline': leg.airline,
                'origin': leg.origin,
                'destination': leg.destination,
                'departure': format_datetime(leg.departure),
                'arrival': format_datetime(leg.arrival),
                'price': format_price(leg.price),
            }
            for leg in itinerary.legs
        ],
        'layovers': [format_duration(layover) for layover in itinerary.layovers],
    }


def render_itineraries_html(result: SearchResult, itineraries: Iterable[Itinerary] | None = None) -> str:
    """Render an HTML report for a search result.

    ``itineraries`` lets callers pass a ranked view of the result; positions still refer to the
    discovery order of ``result``.
    """
    positions = {id(it): pos for pos, it in result.by_position().items()}
    ordered = list(result) if itineraries is None else list(itineraries)
    entries = [_itinerary_context(positions.get(id(it), idx), it) for idx, it in enumerate(ordered, start=1)]

    env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=select_autoescape(['html', 'xml', 'html.j2']))
    tpl = env.get_template('itineraries.html.j2')
    rendered = tpl.render(
        day=result.day.isoformat(),
        origin=result.origin,
        destination=result.destination,
        itineraries=entries,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
    soup = BeautifulSoup(rendered, 'lxml')
    return soup.prettify()
