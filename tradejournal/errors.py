"""Exceptions raised by tradejournal."""

from typing import Optional


class JournalError(Exception):
    """Base class for all tradejournal errors."""


class InvalidInput(JournalError, ValueError):
    """Raised when user-supplied values cannot produce a record.

    Attributes:
        errors: Human readable messages, one per offending field.
    """

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class StoreFailure(JournalError):
    """Raised when the record store cannot complete an operation."""


class AuthFailure(StoreFailure):
    """Raised when the identity provider rejects or fails a request."""


class ImportParseFailure(JournalError, ValueError):
    """Raised for a single CSV row that cannot be turned into a trade.

    Import catches it per row and records the row as skipped.
    """
