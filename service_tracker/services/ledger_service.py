"""
Ledger Service - Ties the ledger to its store, views and exports.

Architecture Decision: Observer Pattern (callbacks)
The service notifies listeners when things change, keeping it decoupled from
whatever renders the records. It never holds state the ledger does not own.
"""

import datetime
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from service_tracker.domain.ledger import ServiceLedger
from service_tracker.domain.models import ServiceRecord
from service_tracker.i18n import tr
from service_tracker.infra.repository import RecordStore
from service_tracker.services.excel_export_service import ExcelExportService
from service_tracker.services.summary_report_service import LedgerView, SummaryReportService

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Runs ledger operations and keeps the store in sync.

    Every mutation is saved as a whole sequence before listeners hear about it.
    Failed operations raise and save nothing.
    """

    def __init__(self, ledger: ServiceLedger, store: RecordStore,
                 exporter: ExcelExportService,
                 reports: Optional[SummaryReportService] = None):
        self.ledger = ledger
        self.store = store
        self.exporter = exporter
        self.reports = reports or SummaryReportService()
        self.search_term = ""

        # Listeners
        self._notification_callbacks: List[Callable[[str], None]] = []
        self._view_callbacks: List[Callable[[LedgerView], None]] = []

        self.ledger.on_change(self._on_ledger_changed)
        self.store.on_external_change(self.handle_external_change)

    def on_notification(self, callback: Callable[[str], None]) -> None:
        """Register a callback for user-facing messages"""
        if callback not in self._notification_callbacks:
            self._notification_callbacks.append(callback)

    def on_view_changed(self, callback: Callable[[LedgerView], None]) -> None:
        """Register a callback that receives the current view after every change"""
        if callback not in self._view_callbacks:
            self._view_callbacks.append(callback)

    async def load(self) -> None:
        """Replace the ledger contents with the stored sequence"""
        records = await self.store.load()
        self.ledger.replace(records)

    async def start_service(self, name: str, range: str, date: str) -> ServiceRecord:
        record = self.ledger.start(name, range, date)
        await self.store.save(self.ledger.records)
        self._notify(tr("notify.started", name=record.name))
        return record

    async def end_service(self, index: int) -> ServiceRecord:
        record = self.ledger.end(index)
        await self.store.save(self.ledger.records)
        self._notify(tr("notify.ended", name=record.name))
        return record

    def export(self, output_path: Optional[Path] = None) -> Path:
        path = self.exporter.export(self.ledger.records, output_path)
        self._notify(tr("notify.exported"))
        return path

    def handle_external_change(self, records: Sequence[ServiceRecord]) -> None:
        """Another session rewrote the store: reload everything, no merge"""
        self.ledger.replace(records)
        self._notify(tr("notify.reloaded"))

    def set_search_term(self, term: str) -> None:
        self.search_term = term
        self._emit_view()

    def view(self, search_term: Optional[str] = None,
             now: Optional[datetime.datetime] = None) -> LedgerView:
        term = self.search_term if search_term is None else search_term
        return self.reports.build_view(self.ledger, term, now)

    def render(self, search_term: Optional[str] = None) -> str:
        return self.reports.render(self.view(search_term))

    def _on_ledger_changed(self, ledger: ServiceLedger) -> None:
        self._emit_view()

    def _emit_view(self) -> None:
        if not self._view_callbacks:
            return
        current = self.view()
        for callback in self._view_callbacks:
            callback(current)

    def _notify(self, message: str) -> None:
        logger.info(message)
        for callback in self._notification_callbacks:
            callback(message)
