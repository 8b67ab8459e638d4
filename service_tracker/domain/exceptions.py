"""
Domain exceptions for ledger operations.

All of them are recoverable: the failing operation leaves the ledger unchanged
and the caller decides how to surface the message.
"""


class LedgerError(Exception):
    """Base exception for service ledger rule violations."""


class IndexOutOfRange(LedgerError, IndexError):
    """Raised when end() is given a position with no record."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"No service record at position {index} (ledger holds {size})")


class AlreadyClosed(LedgerError):
    """Raised when end() targets a record that already has an end time."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Service record at position {index} is already closed")


class InvalidInterval(LedgerError, ValueError):
    """Raised when an end time lies before its start time."""


class StorageError(Exception):
    """Raised when persisted records cannot be read back."""
