"""
Tests for the summary report (record table and weekly summary).
"""

from datetime import datetime, timedelta, timezone

import pytest

from service_tracker.domain.ledger import ServiceLedger
from service_tracker.domain.models import ServiceRecord
from service_tracker.i18n import set_language
from service_tracker.services.summary_report_service import SummaryReportService


NOW = datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def reports():
    return SummaryReportService(tz=timezone.utc)


@pytest.fixture
def filled_ledger():
    records = [
        ServiceRecord(name="Ana", range="Morning", date="2024-01-05", start_time=NOW - timedelta(days=3, hours=28),
                      end_time=NOW - timedelta(days=3), duration="28h 0m 0s"),
        ServiceRecord(name="Luis", range="Night", date="2024-01-06", start_time=NOW - timedelta(days=2, hours=5),
                      end_time=NOW - timedelta(days=2), duration="5h 45m 0s"),
        ServiceRecord(name="Mariana", range="Evening", date="2024-01-08", start_time=NOW - timedelta(hours=1)),
    ]
    return ServiceLedger(records=records, clock=lambda: NOW)


class TestBuildView:

    def test_rows_use_placeholders_for_open_records(self, reports, filled_ledger):
        view = reports.build_view(filled_ledger)

        open_row = view.rows[2]
        assert open_row.end == "In progress"
        assert open_row.duration == "N/A"
        assert open_row.action == "Finish"
        assert view.rows[0].action == "Completed"

    def test_filtered_rows_keep_positions(self, reports, filled_ledger):
        view = reports.build_view(filled_ledger, "an")
        assert [(row.index, row.name) for row in view.rows] == [(0, "Ana"), (2, "Mariana")]

    def test_summary_is_not_filtered(self, reports, filled_ledger):
        view = reports.build_view(filled_ledger, "mariana")
        assert [(row.name, row.hours, row.goal_met) for row in view.summary] == [
            ("Ana", 28, True),
            ("Luis", 5, False),
        ]


class TestRender:

    def test_report_lists_records_and_goals(self, reports, filled_ledger):
        content = reports.render(reports.build_view(filled_ledger))

        assert "Service Records" in content
        assert "Weekly Summary" in content
        assert "28.00" in content
        assert "5.00" in content
        assert "Goal met" in content
        assert "Goal pending" in content
        assert "In progress" in content

    def test_empty_ledger(self, reports):
        content = reports.render(reports.build_view(ServiceLedger(clock=lambda: NOW)))

        assert "No service records" in content
        assert "No completed records in the last 7 days" in content

    def test_spanish_report(self, reports, filled_ledger):
        set_language("es")
        content = reports.render(reports.build_view(filled_ledger))

        assert "Meta Cumplida" in content
        assert "Meta Pendiente" in content
        assert "En curso" in content

    def test_writes_output_file(self, reports, filled_ledger, tmp_path):
        output = tmp_path / "reports" / "summary.txt"

        content = reports.render(reports.build_view(filled_ledger), output_file=output)

        assert output.read_text(encoding="utf-8") == content
