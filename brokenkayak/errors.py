"""Exception hierarchy shared by ingestion, lookups and the search engine."""


class BrokenKayakError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(BrokenKayakError, KeyError):
    """A specific record was requested (client email, result position) and does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ''


class MalformedInputError(BrokenKayakError, ValueError):
    """An input row or query value does not match its declared layout."""


class ConstraintViolation(BrokenKayakError, ValueError):
    """A record would break a model invariant (negative duration, broken leg chain...)."""
