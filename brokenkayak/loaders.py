"""CSV ingestion of clients and flights.

Every row of a file must parse before any record is returned, so callers never admit part of a
bad file. Rows are turned into dicts and then into model dataclasses with dacite type hooks.
"""
import csv
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import BinaryIO, Iterator, TypeVar

import dacite
from tqdm import tqdm

from .config import settings
from .errors import ConstraintViolation, MalformedInputError
from .models import CENT, ClientRecord, FlightRecord

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ('last_name', 'first_names', 'email', 'address', 'credit_card_number', 'expiry_date')
FLIGHT_FIELDS = ('number', 'departure', 'arrival', 'airline', 'origin', 'destination', 'price')

# Minute precision only, matching how date-times are printed back.
DATETIME_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M"]

RecordT = TypeVar('RecordT', ClientRecord, FlightRecord)


# ---------------- Parsing helpers -----------------
def parse_date(date_str: str) -> date:
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise MalformedInputError(f"Date '{date_str}' is not in YYYY-MM-DD format") from None


def parse_datetime(value: str, formats: list[str] | None = None) -> datetime:
    if formats is None:
        formats = DATETIME_FORMATS
    for datetime_format in formats:
        try:
            return datetime.strptime(value.strip(), datetime_format)
        except ValueError:
            continue
    raise MalformedInputError(f"Date-time '{value}' not in formats {formats}")


def parse_price(value: str) -> Decimal:
    try:
        price = Decimal(value.strip())
    except InvalidOperation:
        raise MalformedInputError(f"Price '{value}' is not a number") from None
    if not price.is_finite():
        raise MalformedInputError(f"Price '{value}' is not a finite number")
    if price != price.quantize(CENT):
        raise MalformedInputError(f"Price '{value}' has more than two decimal places")
    return price


_DACITE_CONFIG = dacite.Config(
    type_hooks={
        date: parse_date,
        datetime: parse_datetime,
        Decimal: parse_price,
    },
    strict=True,
)


# ---------------- Row reading -----------------
def _decoded_lines(f: BinaryIO, path: Path) -> Iterator[str]:
    for line_no, raw in enumerate(f, start=1):
        try:
            yield raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"{path}:{line_no}: not valid UTF-8 ({e.reason} at byte {e.start})") from e


def _read_rows(path: Path, fields: tuple[str, ...]) -> list[tuple[int, dict[str, str]]]:
    rows = []
    with open(path, 'rb') as f:
        for line_no, row in enumerate(csv.reader(_decoded_lines(f, path)), start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            if len(row) != len(fields):
                raise MalformedInputError(
                    f"{path}:{line_no}: expected {len(fields)} fields, got {len(row)}"
                )
            rows.append((line_no, dict(zip(fields, (cell.strip() for cell in row)))))
    return rows


def _build_records(path: Path, fields: tuple[str, ...], data_class: type[RecordT], desc: str) -> list[RecordT]:
    records = []
    rows = _read_rows(path, fields)
    for line_no, row in tqdm(rows, desc=desc, leave=False, disable=not settings.show_progress):
        try:
            records.append(dacite.from_dict(data_class=data_class, data=row, config=_DACITE_CONFIG))
        except MalformedInputError as e:
            raise MalformedInputError(f"{path}:{line_no}: {e}") from e
        except ConstraintViolation as e:
            raise ConstraintViolation(f"{path}:{line_no}: {e}") from e
        except dacite.DaciteError as e:
            raise MalformedInputError(f"{path}:{line_no}: {e}") from e
    logger.info("Loaded %d %s records from %s", len(records), data_class.__name__, path)
    return records


# ---------------- public API -----------------
def load_clients(path: str | Path) -> list[ClientRecord]:
    """Read ``LastName,FirstNames,Email,Address,CreditCardNumber,ExpiryDate`` lines."""
    return _build_records(Path(path), CLIENT_FIELDS, ClientRecord, 'Loading clients')


def load_flights(path: str | Path) -> list[FlightRecord]:
    """Read ``Number,DepartureDateTime,ArrivalDateTime,Airline,Origin,Destination,Price`` lines."""
    return _build_records(Path(path), FLIGHT_FIELDS, FlightRecord, 'Loading flights')
