"""Domain layer - Pure business entities and logic"""

from .models import ServiceRecord, WeeklySummaryRow, LedgerPreferences
from .exceptions import LedgerError, IndexOutOfRange, AlreadyClosed, InvalidInterval, StorageError
from .ledger import ServiceLedger, format_duration, weekly_hours, meets_weekly_goal

__all__ = [
    "ServiceRecord", "WeeklySummaryRow", "LedgerPreferences",
    "LedgerError", "IndexOutOfRange", "AlreadyClosed", "InvalidInterval", "StorageError",
    "ServiceLedger", "format_duration", "weekly_hours", "meets_weekly_goal",
]
