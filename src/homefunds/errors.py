"""Exception taxonomy shared by the store adapters and services."""

from __future__ import annotations


class HomeFundsError(Exception):
    """Base class for every error raised on purpose by HomeFunds."""


class ValidationError(HomeFundsError, ValueError):
    """Input rejected at the data-entry boundary (amount, description, category)."""


class InvalidAmount(ValidationError):
    """A goal contribution that is not strictly positive."""


class NotFound(HomeFundsError, LookupError):
    """A delete or update referenced a record id that does not exist."""

    def __init__(self, kind: str, record_id: object):
        super().__init__(f"{kind} {record_id!r} not found")
        self.kind = kind
        self.record_id = record_id


class StoreUnavailable(HomeFundsError):
    """The backing store could not be reached or failed mid-operation."""


__all__ = [
    "HomeFundsError",
    "InvalidAmount",
    "NotFound",
    "StoreUnavailable",
    "ValidationError",
]
