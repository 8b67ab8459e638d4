"""
Summary Report Service using Jinja2 templates.

Architecture Decision: Template Pattern
The record table and weekly summary are rendered from a template, so the
layout can change without touching the ledger.
"""

import datetime
import logging
from pathlib import Path
from typing import List, Optional
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel

from service_tracker.domain.ledger import ServiceLedger
from service_tracker.domain.models import WeeklySummaryRow
from service_tracker.i18n import tr, format_timestamp
from service_tracker.utils import get_resource_path

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "service_summary.txt"


class RecordRow(BaseModel):
    """A record prepared for display; index is its position in the ledger."""

    index: int
    name: str
    range: str
    date: str
    start: str
    end: str
    duration: str
    is_open: bool
    action: str


class LedgerView(BaseModel):
    """Everything the presentation layer needs after a ledger change."""

    search_term: str = ""
    window_days: int
    rows: List[RecordRow]
    summary: List[WeeklySummaryRow]


class SummaryReportService:
    """
    Builds ledger views and renders them as text reports.
    """

    def __init__(self, template_dir: Optional[Path] = None, tz: Optional[datetime.tzinfo] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
            tz: Display timezone, defaults to the system's local zone
        """
        if template_dir is None:
            template_dir = get_resource_path("resources/templates")

        self.template_dir = Path(template_dir)
        self.tz = tz

        # Setup Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )
        self.env.globals['tr'] = tr

    def build_view(self, ledger: ServiceLedger, search_term: str = "",
                   now: Optional[datetime.datetime] = None) -> LedgerView:
        """
        Filter the records by name and pair them with the weekly summary.
        """
        rows = [
            RecordRow(
                index=index,
                name=record.name,
                range=record.range,
                date=record.date,
                start=format_timestamp(record.start_time, self.tz),
                end=format_timestamp(record.end_time, self.tz) if record.end_time else tr("records.in_progress"),
                duration=record.duration or tr("records.not_available"),
                is_open=record.is_open,
                action=tr("records.finish") if record.is_open else tr("records.completed"),
            )
            for index, record in ledger.search(search_term)
        ]

        return LedgerView(
            search_term=search_term,
            window_days=ledger.window_days,
            rows=rows,
            summary=ledger.summary(now),
        )

    def render(self, view: LedgerView, template_name: str = DEFAULT_TEMPLATE,
               output_file: Optional[Path] = None) -> str:
        """
        Render a view with a template.

        Args:
            view: Output of build_view()
            template_name: Name of the template file
            output_file: Optional file path to save the report

        Returns:
            The rendered report as a string
        """
        template = self.env.get_template(template_name)
        content = template.render(**view.model_dump())

        # Save to file if specified
        if output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(content)
            logger.info(f"Summary report written to {output_file}")

        return content

