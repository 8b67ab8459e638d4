"""
Command-line interface for the service ledger.

Usage:
    service-tracker start NAME RANGE DATE
    service-tracker end INDEX
    service-tracker list [--search TERM]
    service-tracker summary
    service-tracker export [--output PATH]
    service-tracker watch [--interval SECONDS]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from service_tracker.domain.exceptions import AlreadyClosed, IndexOutOfRange, InvalidInterval, StorageError
from service_tracker.domain.ledger import ServiceLedger
from service_tracker.i18n import set_language, tr
from service_tracker.infra.config import Settings
from service_tracker.infra.logging_config import setup_logging
from service_tracker.infra.repository import create_record_store
from service_tracker.services.excel_export_service import ExcelExportService
from service_tracker.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="service-tracker", description="Track service hours per worker")
    parser.add_argument("--config", type=Path, help="YAML preferences file")
    parser.add_argument("--data-dir", type=Path, help="Directory holding the record store")

    commands = parser.add_subparsers(dest="command", required=True)

    start = commands.add_parser("start", help="Start a service record")
    start.add_argument("name")
    start.add_argument("range")
    start.add_argument("date")

    end = commands.add_parser("end", help="Finish the service record at INDEX")
    end.add_argument("index", type=int)

    listing = commands.add_parser("list", help="Show records and the weekly summary")
    listing.add_argument("--search", default="", help="Only show names containing this text")

    commands.add_parser("summary", help="Show the weekly summary")

    export = commands.add_parser("export", help="Export all records to an .xlsx file")
    export.add_argument("--output", type=Path, help="Target file")

    watch = commands.add_parser("watch", help="Re-render whenever another session changes the records")
    watch.add_argument("--interval", type=float, default=2.0, help="Polling interval in seconds")

    return parser


async def build_service(settings: Settings) -> LedgerService:
    """Wire ledger, store and exporter from the settings and load the records"""
    prefs = settings.preferences
    store = await create_record_store(settings)
    ledger = ServiceLedger(weekly_goal_hours=prefs.weekly_goal_hours, window_days=prefs.window_days)
    exporter = ExcelExportService(settings.get_export_dir())

    service = LedgerService(ledger, store, exporter)
    try:
        await service.load()
    except StorageError:
        await store.close()
        raise
    return service


async def run(args: argparse.Namespace, settings: Settings) -> int:
    service = await build_service(settings)
    service.on_notification(print)
    try:
        await dispatch(args, service)
    finally:
        await service.store.close()
    return 0


async def dispatch(args: argparse.Namespace, service: LedgerService) -> None:
    if args.command == "start":
        record = await service.start_service(args.name, args.range, args.date)
        print(f"#{len(service.ledger) - 1} {record.name}")
    elif args.command == "end":
        record = await service.end_service(args.index)
        print(f"#{args.index} {record.name}: {record.duration}")
    elif args.command == "list":
        print(service.render(args.search))
    elif args.command == "summary":
        for row in service.view().summary:
            status = tr("summary.goal_met") if row.goal_met else tr("summary.goal_pending")
            print(f"{row.name}: {row.hours:.2f} ({status})")
    elif args.command == "export":
        service.export(args.output)
    elif args.command == "watch":
        service.on_view_changed(lambda view: print(service.reports.render(view)))
        print(service.render())
        await service.store.watch(args.interval)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {}
    if args.config:
        overrides["config_file"] = args.config
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    settings = Settings(**overrides)

    setup_logging(settings.preferences.log_level)
    set_language(settings.preferences.language)

    try:
        return asyncio.run(run(args, settings))
    except IndexOutOfRange as e:
        print(tr("error.index_out_of_range", index=e.index), file=sys.stderr)
    except AlreadyClosed as e:
        print(tr("error.already_closed", index=e.index), file=sys.stderr)
    except InvalidInterval:
        print(tr("error.invalid_interval"), file=sys.stderr)
    except StorageError as e:
        print(tr("error.storage", detail=e), file=sys.stderr)
    except KeyboardInterrupt:
        logger.info("Stopped")
        return 0
    return 1
