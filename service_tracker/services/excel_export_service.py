"""
Excel Export Service using XlsxWriter.
Writes the full record sequence to a single formatted worksheet.
"""

import datetime
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence
import xlsxwriter

from service_tracker.domain.ledger import utc_now
from service_tracker.domain.models import ServiceRecord
from service_tracker.i18n import tr, format_timestamp

logger = logging.getLogger(__name__)

COLUMN_KEYS = [
    "records.name",
    "records.range",
    "records.date",
    "records.start",
    "records.end",
    "records.duration",
]

COLUMN_WIDTHS = [24, 18, 12, 24, 24, 14]


class ExcelExportService:
    """
    Generates .xlsx exports with one row per service record.

    Timestamps are written as localized text, open records show the
    "in progress" and "N/A" placeholders.
    """

    def __init__(self, export_dir: Path, tz: Optional[datetime.tzinfo] = None,
                 clock: Callable[[], datetime.datetime] = utc_now):
        self.export_dir = Path(export_dir)
        self.tz = tz
        self.clock = clock

    def build_rows(self, records: Sequence[ServiceRecord]) -> List[List[str]]:
        """Header row followed by one row per record"""
        rows = [[tr(key) for key in COLUMN_KEYS]]
        for record in records:
            rows.append([
                record.name,
                record.range,
                record.date,
                format_timestamp(record.start_time, self.tz),
                format_timestamp(record.end_time, self.tz) if record.end_time else tr("records.in_progress"),
                record.duration or tr("records.not_available"),
            ])
        return rows

    def default_filename(self) -> str:
        return tr("export.filename", date=self.clock().date().isoformat())

    def export(self, records: Sequence[ServiceRecord], output_path: Optional[Path] = None) -> Path:
        """
        Write the workbook.

        Args:
            records: Full record sequence
            output_path: Target file, defaults to a dated name in export_dir

        Returns:
            Path of the written file
        """
        if output_path is None:
            output_path = self.export_dir / self.default_filename()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        rows = self.build_rows(records)

        workbook = xlsxwriter.Workbook(str(output_path))

        # Colors & Formats
        fmt_header = workbook.add_format({
            'bold': True, 'bg_color': '#4472C4', 'font_color': 'white', 'border': 1
        })
        fmt_cell = workbook.add_format({'border': 1})

        worksheet = workbook.add_worksheet(tr("export.sheet"))
        for col, width in enumerate(COLUMN_WIDTHS):
            worksheet.set_column(col, col, width)

        # write_string keeps user text like "=x" from being read as a formula
        for row_idx, row in enumerate(rows):
            fmt = fmt_header if row_idx == 0 else fmt_cell
            for col_idx, value in enumerate(row):
                worksheet.write_string(row_idx, col_idx, value, fmt)

        worksheet.freeze_panes(1, 0)
        if len(rows) > 1:
            worksheet.autofilter(0, 0, len(rows) - 1, len(COLUMN_KEYS) - 1)

        workbook.close()
        logger.info(f"Exported {len(rows) - 1} records to {output_path}")
        return output_path
