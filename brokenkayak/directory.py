import logging
from collections.abc import Iterable, Iterator

from .errors import NotFoundError
from .models import ClientRecord

logger = logging.getLogger(__name__)


class ClientDirectory:
    """Client records keyed by email. A later record with the same email replaces the earlier one."""

    def __init__(self, clients: Iterable[ClientRecord] = ()):
        self._by_email: dict[str, ClientRecord] = {}
        self.add_clients(clients)

    def add_client(self, record: ClientRecord) -> None:
        if record.email in self._by_email:
            logger.warning("Duplicate client email %s, replacing previous record", record.email)
        self._by_email[record.email] = record

    def add_clients(self, records: Iterable[ClientRecord]) -> int:
        added = 0
        for record in records:
            self.add_client(record)
            added += 1
        return added

    def get(self, email: str) -> ClientRecord:
        try:
            return self._by_email[email]
        except KeyError:
            raise NotFoundError(f"No client with email {email!r}") from None

    def __contains__(self, email: object) -> bool:
        return email in self._by_email

    def __len__(self) -> int:
        return len(self._by_email)

    def __iter__(self) -> Iterator[ClientRecord]:
        return iter(self._by_email.values())
