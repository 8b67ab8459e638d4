"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Records are loaded back from JSON files and SQLite rows written by other
sessions. Validating on load keeps the open/closed invariants intact no matter
where the data came from, and aliases keep the stored key names stable.
"""

import re
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


_HOURS_PATTERN = re.compile(r"(\d+)h")


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ServiceRecord(BaseModel):
    """
    A single service interval for one worker.

    Open while end_time is None. Closing sets end_time and duration together;
    start_time never changes after creation.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    name: str
    range: str
    date: str
    start_time: datetime = Field(alias="startTime")
    end_time: Optional[datetime] = Field(default=None, alias="endTime")
    duration: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # SQLite hands back naive datetimes; everything is stored in UTC
        return as_utc(value) if value is not None else None

    @model_validator(mode="after")
    def check_lifecycle(self) -> "ServiceRecord":
        if (self.end_time is None) != (self.duration is None):
            raise ValueError("end_time and duration must be set together")
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def whole_hours(self) -> int:
        """Leading hour count of the duration text; minutes and seconds are dropped."""
        if not self.duration:
            return 0
        match = _HOURS_PATTERN.search(self.duration)
        return int(match.group(1)) if match else 0

    def to_storage(self) -> dict:
        """Serialize with the stored key names and ISO timestamps."""
        return self.model_dump(mode="json", by_alias=True)


class WeeklySummaryRow(BaseModel):
    """One worker's accumulated hours in the trailing window."""

    name: str
    hours: float
    goal_met: bool


class LedgerPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    # Weekly goal
    weekly_goal_hours: float = Field(default=28.0, ge=0, description="Hours needed to meet the weekly goal")
    window_days: int = Field(default=7, ge=1, description="Length of the trailing summary window in days")

    # Storage
    storage_backend: str = Field(default="json", pattern="^(json|sqlite)$",
                                 description="Record store: 'json' file or 'sqlite' database")

    # Export settings
    export_directory: Optional[str] = Field(default=None, description="Where spreadsheet exports are written")

    # UI settings
    language: str = Field(default="auto", description="UI language: 'en', 'es', or 'auto' (detect from system)")
    log_level: str = Field(default="INFO", description="Root logging level")
