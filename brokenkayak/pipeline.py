"""Command line entry point: load CSV inputs and answer one query.

Usage patterns:

1. Look up a client:
   brokenkayak --clients clients.csv --client jane@example.com

2. Direct flights on a date:
   brokenkayak --flights flights.csv --mode flights --date 2024-01-01 --origin AAA --destination CCC

3. Itineraries, ranked by cost and rendered to HTML as well:
   brokenkayak --date 2024-01-01 --origin AAA --destination CCC --sort cost --html
"""
import argparse
import logging
from pathlib import Path
from typing import Literal, Sequence

from brokenkayak.booking import BookingSystem
from brokenkayak.config import settings
from brokenkayak.errors import BrokenKayakError
from brokenkayak.formatting import format_itineraries
from brokenkayak.logging_config import setup_logging
from brokenkayak.processing.ranking import SortOrder
from brokenkayak.report import render_itineraries_html

QueryMode = Literal["flights", "itineraries"]
SortChoice = Literal["none", "cost", "time"]


def run_query(
        clients_csv: Path | None = None,
        flights_csv: Path | None = None,
        client_email: str | None = None,
        mode: QueryMode = "itineraries",
        day: str | None = None,
        origin: str | None = None,
        destination: str | None = None,
        sort: SortChoice = "none",
        html: Path | None = None,
        system: BookingSystem | None = None,
) -> str:
    system = system if system is not None else BookingSystem()

    if client_email is not None:
        system.upload_clients(clients_csv or settings.clients_csv)
        return system.get_client(client_email)

    if not (day and origin and destination):
        raise ValueError("--date, --origin and --destination are required for flight queries")

    system.upload_flights(flights_csv or settings.flights_csv)

    if mode == "flights":
        return system.get_flights(day, origin, destination)

    result = system.search(day, origin, destination)
    logging.info(f"Found {len(result)} itineraries {origin} -> {destination} on {result.day}")
    if sort == "none":
        ranked = None
        text = format_itineraries(result, separated=True)
    else:
        ranked = system.ranker.rank(result, SortOrder(sort))
        text = format_itineraries(ranked)

    if html is not None:
        html.write_text(render_itineraries_html(result, ranked), encoding="utf-8")
        logging.info(f"HTML report written to {html}")
    return text


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Flight network itinerary search")
    p.add_argument("--clients", type=Path, default=None, help=f"Clients CSV (default {settings.clients_csv})")
    p.add_argument("--flights", type=Path, default=None, help=f"Flights CSV (default {settings.flights_csv})")
    p.add_argument("--client", metavar="EMAIL", help="Print the stored record of one client and exit")
    p.add_argument("--mode", choices=["flights", "itineraries"], default="itineraries")
    p.add_argument("--date", help="Departure date YYYY-MM-DD")
    p.add_argument("--origin", help="Origin airport code")
    p.add_argument("--destination", help="Destination airport code")
    p.add_argument("--sort", choices=["none", "cost", "time"], default="none", help="Itinerary order")
    p.add_argument("--html", nargs="?", type=Path, const=settings.output_html, default=None, metavar="PATH",
                   help=f"Also write an HTML report (default path {settings.output_html})")
    p.add_argument("--log-level", default=settings.log_level)
    return p


def main_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        output = run_query(
            clients_csv=args.clients,
            flights_csv=args.flights,
            client_email=args.client,
            mode=args.mode,
            day=args.date,
            origin=args.origin,
            destination=args.destination,
            sort=args.sort,
            html=args.html,
        )
    except (BrokenKayakError, OSError, ValueError):
        logging.exception("Query failed")
        return 1
    print(output.rstrip("\n"))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main_cli())
