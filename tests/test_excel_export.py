"""
Tests for the Excel export service.
"""

import zipfile
from datetime import datetime, timedelta, timezone

from service_tracker.domain.models import ServiceRecord
from service_tracker.i18n import set_language
from service_tracker.services.excel_export_service import ExcelExportService


START = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


def sample_records():
    return [
        ServiceRecord(name="Ana", range="Morning", date="2024-01-01", start_time=START,
                      end_time=START + timedelta(hours=2, minutes=15, seconds=40), duration="2h 15m 40s"),
        ServiceRecord(name="=Luis", range="Night", date="2024-01-02", start_time=START + timedelta(days=1)),
    ]


def read_part(path, part: str) -> str:
    with zipfile.ZipFile(path) as archive:
        return archive.read(part).decode("utf-8")


class TestBuildRows:

    def test_header_and_rows(self, tmp_path):
        service = ExcelExportService(tmp_path, tz=timezone.utc)

        rows = service.build_rows(sample_records())

        assert rows[0] == ["Name", "Range", "Date", "Start time", "End time", "Duration"]
        assert rows[1] == ["Ana", "Morning", "2024-01-01", "01/01/2024, 08:00:00 AM",
                           "01/01/2024, 10:15:40 AM", "2h 15m 40s"]
        assert rows[2][4:] == ["In progress", "N/A"]

    def test_spanish_labels(self, tmp_path):
        set_language("es")
        service = ExcelExportService(tmp_path, tz=timezone.utc)

        rows = service.build_rows(sample_records())

        assert rows[0] == ["Nombre", "Rango", "Fecha", "Hora de Inicio", "Hora de Fin", "Duración"]
        assert rows[1][3] == "01/01/2024, 08:00:00"
        assert rows[2][4] == "En curso"

    def test_local_timezone_is_applied(self, tmp_path):
        minus_five = timezone(timedelta(hours=-5))
        service = ExcelExportService(tmp_path, tz=minus_five)

        rows = service.build_rows(sample_records()[:1])

        assert rows[1][3] == "01/01/2024, 03:00:00 AM"


class TestExport:

    def test_default_filename_uses_clock_date(self, tmp_path):
        service = ExcelExportService(tmp_path, clock=lambda: datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc))

        path = service.export(sample_records())

        assert path == tmp_path / "Service_Records_2024-03-05.xlsx"
        assert path.exists()

    def test_workbook_contents(self, tmp_path):
        service = ExcelExportService(tmp_path, tz=timezone.utc)

        path = service.export(sample_records(), tmp_path / "out" / "records.xlsx")

        assert path.exists()
        assert 'name="Service Records"' in read_part(path, "xl/workbook.xml")
        strings = read_part(path, "xl/sharedStrings.xml")
        for expected in ("Name", "Ana", "2h 15m 40s", "In progress", "N/A", "=Luis"):
            assert expected in strings

    def test_user_text_is_not_a_formula(self, tmp_path):
        service = ExcelExportService(tmp_path, tz=timezone.utc)

        path = service.export(sample_records(), tmp_path / "records.xlsx")

        assert "<f>" not in read_part(path, "xl/worksheets/sheet1.xml")

    def test_empty_ledger_writes_header_only(self, tmp_path):
        service = ExcelExportService(tmp_path)

        path = service.export([], tmp_path / "empty.xlsx")

        strings = read_part(path, "xl/sharedStrings.xml")
        assert "Duration" in strings
