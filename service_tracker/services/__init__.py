"""Services layer - Orchestration, reports and exports"""

from .ledger_service import LedgerService
from .excel_export_service import ExcelExportService
from .summary_report_service import SummaryReportService, LedgerView, RecordRow

__all__ = ["LedgerService", "ExcelExportService", "SummaryReportService", "LedgerView", "RecordRow"]
