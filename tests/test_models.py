"""
Tests for the ServiceRecord model and its stored shape.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from service_tracker.domain.models import LedgerPreferences, ServiceRecord


START = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


class TestServiceRecordValidation:

    def test_end_time_without_duration_is_rejected(self):
        with pytest.raises(ValidationError):
            ServiceRecord(name="Ana", range="Morning", date="2024-01-01",
                          start_time=START, end_time=START + timedelta(hours=1))

    def test_duration_without_end_time_is_rejected(self):
        with pytest.raises(ValidationError):
            ServiceRecord(name="Ana", range="Morning", date="2024-01-01",
                          start_time=START, duration="1h 0m 0s")

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            ServiceRecord(name="Ana", range="Morning", date="2024-01-01", start_time=START,
                          end_time=START - timedelta(seconds=1), duration="0h 0m 0s")

    def test_records_are_frozen(self):
        record = ServiceRecord(name="Ana", range="Morning", date="2024-01-01", start_time=START)
        with pytest.raises(ValidationError):
            record.start_time = START + timedelta(hours=1)

    def test_naive_timestamps_are_read_as_utc(self):
        record = ServiceRecord(name="Ana", range="Morning", date="2024-01-01",
                               start_time=datetime(2024, 1, 1, 8, 0))
        assert record.start_time == START

    def test_offset_timestamps_are_normalized_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        record = ServiceRecord(name="Ana", range="Morning", date="2024-01-01",
                               start_time=datetime(2024, 1, 1, 10, 0, tzinfo=plus_two))
        assert record.start_time.utcoffset() == timedelta(0)
        assert record.start_time == START


class TestWholeHours:

    @pytest.mark.parametrize("duration,hours", [
        ("5h 30m 0s", 5),
        ("0h 59m 59s", 0),
        ("123h 0m 1s", 123),
        (None, 0),
        ("garbage", 0),
    ])
    def test_leading_hours(self, duration, hours):
        end_time = START + timedelta(hours=1) if duration else None
        record = ServiceRecord(name="Ana", range="Morning", date="2024-01-01",
                               start_time=START, end_time=end_time, duration=duration)
        assert record.whole_hours == hours


class TestStorageShape:

    def test_uses_stored_key_names(self):
        record = ServiceRecord(name="Ana", range="Morning", date="2024-01-01", start_time=START)

        data = record.to_storage()

        assert set(data) == {"name", "range", "date", "startTime", "endTime", "duration"}
        assert data["endTime"] is None
        assert data["duration"] is None
        assert datetime.fromisoformat(data["startTime"].replace("Z", "+00:00")) == START

    def test_loads_browser_storage_objects(self):
        record = ServiceRecord.model_validate({
            "name": "Ana",
            "range": "Morning",
            "date": "2024-01-01",
            "startTime": "2024-01-01T08:00:00.000Z",
            "endTime": "2024-01-01T10:15:40.000Z",
            "duration": "2h 15m 40s",
        })

        assert record.start_time == START
        assert record.end_time == START + timedelta(hours=2, minutes=15, seconds=40)
        assert record.whole_hours == 2


class TestLedgerPreferences:

    def test_defaults(self):
        prefs = LedgerPreferences()
        assert prefs.weekly_goal_hours == 28
        assert prefs.window_days == 7
        assert prefs.storage_backend == "json"

    def test_unknown_backend_is_rejected(self):
        with pytest.raises(ValidationError):
            LedgerPreferences(storage_backend="redis")
