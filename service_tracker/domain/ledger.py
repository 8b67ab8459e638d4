"""
Service Ledger - the append-only sequence of service records.

Architecture Decision: Observer Pattern (callbacks)
The ledger notifies listeners after each mutation and knows nothing about
storage, rendering or export. Those adapters subscribe through on_change().
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from service_tracker.domain.exceptions import AlreadyClosed, IndexOutOfRange, InvalidInterval
from service_tracker.domain.models import ServiceRecord, WeeklySummaryRow, as_utc

logger = logging.getLogger(__name__)

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000

DEFAULT_WEEKLY_GOAL_HOURS = 28
DEFAULT_WINDOW_DAYS = 7


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_duration(start_time: datetime, end_time: datetime) -> str:
    """
    Format the elapsed time between two timestamps as "{h}h {m}m {s}s".

    Hours are not rolled over into days and no value is zero padded.

    Raises:
        InvalidInterval: end_time lies before start_time
    """
    start_time, end_time = as_utc(start_time), as_utc(end_time)
    diff = (end_time - start_time) // timedelta(milliseconds=1)
    if diff < 0:
        raise InvalidInterval(f"End time {end_time.isoformat()} is before start time {start_time.isoformat()}")

    hours = diff // MS_PER_HOUR
    minutes = (diff % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (diff % MS_PER_MINUTE) // MS_PER_SECOND
    return f"{hours}h {minutes}m {seconds}s"


def weekly_hours(records: Iterable[ServiceRecord], now: datetime,
                 window_days: int = DEFAULT_WINDOW_DAYS) -> Dict[str, int]:
    """
    Accumulate whole hours per worker for records closed inside the window.

    A record qualifies when its end time is strictly after now - window_days.
    Only the hour part of each duration counts. Workers without a qualifying
    record are absent from the result.
    """
    window_start = as_utc(now) - timedelta(days=window_days)
    totals: Dict[str, int] = {}

    for record in records:
        if record.end_time is None or record.end_time <= window_start:
            continue
        totals[record.name] = totals.get(record.name, 0) + record.whole_hours

    return totals


def meets_weekly_goal(hours: float, goal_hours: float = DEFAULT_WEEKLY_GOAL_HOURS) -> bool:
    return hours >= goal_hours


class ServiceLedger:
    """
    Owns the ordered sequence of service records.

    Records are only ever appended (start) or closed (end). replace() swaps the
    whole sequence when another session rewrote the shared store.
    """

    def __init__(self, records: Optional[Iterable[ServiceRecord]] = None,
                 clock: Callable[[], datetime] = utc_now,
                 weekly_goal_hours: float = DEFAULT_WEEKLY_GOAL_HOURS,
                 window_days: int = DEFAULT_WINDOW_DAYS):
        self._records: List[ServiceRecord] = list(records or [])
        self.clock = clock
        self.weekly_goal_hours = weekly_goal_hours
        self.window_days = window_days

        # Callbacks to notify when records change
        self._change_callbacks: List[Callable[["ServiceLedger"], None]] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[ServiceRecord, ...]:
        """Read-only snapshot of the sequence"""
        return tuple(self._records)

    def get(self, index: int) -> ServiceRecord:
        if not 0 <= index < len(self._records):
            raise IndexOutOfRange(index, len(self._records))
        return self._records[index]

    def start(self, name: str, range: str, date: str) -> ServiceRecord:
        """
        Open a new record stamped with the current time.

        No validation is applied to the inputs; empty strings are accepted.
        """
        record = ServiceRecord(name=name, range=range, date=date, start_time=as_utc(self.clock()))
        self._records.append(record)
        logger.info(f"Service record started for {name!r} at position {len(self._records) - 1}")
        self._notify()
        return record

    def end(self, index: int) -> ServiceRecord:
        """
        Close the open record at index.

        Raises:
            IndexOutOfRange: no record at index
            AlreadyClosed: the record already has an end time
            InvalidInterval: the clock reads earlier than the record's start
        """
        record = self.get(index)
        if not record.is_open:
            raise AlreadyClosed(index)

        end_time = as_utc(self.clock())
        duration = format_duration(record.start_time, end_time)

        closed = ServiceRecord.model_validate(
            {**record.model_dump(), "end_time": end_time, "duration": duration}
        )
        self._records[index] = closed
        logger.info(f"Service record ended for {record.name!r} at position {index} ({duration})")
        self._notify()
        return closed

    def replace(self, records: Iterable[ServiceRecord]) -> None:
        """Swap in a full sequence loaded from elsewhere (last writer wins)."""
        self._records = list(records)
        logger.info(f"Ledger reloaded with {len(self._records)} records")
        self._notify()

    def search(self, term: str = "") -> List[Tuple[int, ServiceRecord]]:
        """
        Records whose name contains term, case-insensitive.

        Positions refer to the full sequence so they can be passed to end().
        """
        needle = term.lower()
        return [
            (index, record)
            for index, record in enumerate(self._records)
            if needle in record.name.lower()
        ]

    def weekly_hours(self, now: Optional[datetime] = None) -> Dict[str, int]:
        return weekly_hours(self._records, as_utc(now or self.clock()), self.window_days)

    def summary(self, now: Optional[datetime] = None) -> List[WeeklySummaryRow]:
        """Weekly totals with goal classification, in first-seen order"""
        return [
            WeeklySummaryRow(name=name, hours=hours,
                             goal_met=meets_weekly_goal(hours, self.weekly_goal_hours))
            for name, hours in self.weekly_hours(now).items()
        ]

    def on_change(self, callback: Callable[["ServiceLedger"], None]) -> None:
        """
        Register a callback to be notified after every mutation.

        Args:
            callback: Function that takes the ledger as argument.
        """
        if callback not in self._change_callbacks:
            self._change_callbacks.append(callback)

    def _notify(self) -> None:
        for callback in self._change_callbacks:
            callback(self)
