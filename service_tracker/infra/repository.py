"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from the ledger. Makes it easy to:
- Switch between a shared JSON file and an SQLite database
- Mock data for testing
- Share one record sequence between several running sessions

Every store reads and writes the whole sequence at once; the ledger never
sees partial writes.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from service_tracker.domain.exceptions import StorageError
from service_tracker.domain.models import ServiceRecord
from service_tracker.infra.db import ServiceRecordModel, DatabaseEngine, init_db

logger = logging.getLogger(__name__)

ExternalChangeHandler = Callable[[List[ServiceRecord]], None]


class RecordStore:
    """
    Base class for whole-sequence record persistence.

    Subclasses implement _read() and _write(). The base class tracks the last
    sequence it saw so it can tell when another process rewrote the store.
    """

    def __init__(self):
        self._snapshot: Optional[List[dict]] = None
        self._change_handlers: List[ExternalChangeHandler] = []

    async def _read(self) -> List[ServiceRecord]:
        raise NotImplementedError("Subclasses must implement _read")

    async def _write(self, records: Sequence[ServiceRecord]) -> None:
        raise NotImplementedError("Subclasses must implement _write")

    async def load(self) -> List[ServiceRecord]:
        """Load the full record sequence"""
        records = await self._read()
        self._snapshot = [r.to_storage() for r in records]
        return records

    async def save(self, records: Sequence[ServiceRecord]) -> None:
        """Replace the stored sequence with records"""
        await self._write(records)
        self._snapshot = [r.to_storage() for r in records]

    def on_external_change(self, handler: ExternalChangeHandler) -> None:
        """
        Register a handler called with the full new sequence whenever another
        process changed the store.
        """
        if handler not in self._change_handlers:
            self._change_handlers.append(handler)

    async def poll_external_change(self) -> bool:
        """
        Check the store once for changes made elsewhere.

        Returns:
            True if the stored sequence changed and handlers were notified
        """
        records = await self._read()
        snapshot = [r.to_storage() for r in records]
        if snapshot == self._snapshot:
            return False

        self._snapshot = snapshot
        logger.info(f"Record store changed externally ({len(records)} records)")
        for handler in self._change_handlers:
            handler(records)
        return True

    async def close(self) -> None:
        """Release any resources held by the store"""

    async def watch(self, interval: float = 2.0) -> None:
        """Poll for external changes until cancelled"""
        while True:
            try:
                await self.poll_external_change()
            except StorageError as e:
                # Another writer may be mid-write; try again on the next tick
                logger.warning(f"Skipping unreadable store contents: {e}")
            await asyncio.sleep(interval)


class JsonRecordStore(RecordStore):
    """
    Stores the sequence as a JSON list in a single file.

    The file uses the same object shape as the shared browser storage key:
    name, range, date, startTime, endTime, duration.
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)

    async def _read(self) -> List[ServiceRecord]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Record file {self.path} is not valid JSON: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"Record file {self.path} must hold a list of records")

        try:
            return [ServiceRecord.model_validate(item) for item in data]
        except ValidationError as e:
            raise StorageError(f"Record file {self.path} holds an invalid record: {e}") from e

    async def _write(self, records: Sequence[ServiceRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.to_storage() for r in records]

        # Write next to the target, then swap it in so readers never see half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(payload)} records to {self.path}")


class SqlRecordStore(RecordStore):
    """
    Stores the sequence in the service_records table.

    Converts between domain models (Pydantic) and ORM models (SQLAlchemy).
    """

    def __init__(self, engine: Optional[DatabaseEngine] = None, session: Optional[AsyncSession] = None):
        super().__init__()
        if engine is None and session is None:
            raise ValueError("SqlRecordStore needs an engine or a session")
        self.engine = engine
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        return self.engine.get_session()

    async def _read(self) -> List[ServiceRecord]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(ServiceRecordModel).order_by(ServiceRecordModel.position)
            )
            models = result.scalars().all()
            try:
                return [
                    ServiceRecord(
                        name=m.name,
                        range=m.range,
                        date=m.date,
                        start_time=m.start_time,
                        end_time=m.end_time,
                        duration=m.duration,
                    )
                    for m in models
                ]
            except ValidationError as e:
                raise StorageError(f"Database holds an invalid record: {e}") from e

    async def _write(self, records: Sequence[ServiceRecord]) -> None:
        session = await self._get_session()
        async with session:
            await session.execute(delete(ServiceRecordModel))
            session.add_all([
                ServiceRecordModel(
                    position=position,
                    name=record.name,
                    range=record.range,
                    date=record.date,
                    start_time=record.start_time,
                    end_time=record.end_time,
                    duration=record.duration,
                )
                for position, record in enumerate(records)
            ])
            await session.commit()

        logger.debug(f"Saved {len(records)} records to database")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


async def create_record_store(settings) -> RecordStore:
    """
    Create the record store selected in the settings.

    Returns:
        RecordStore for the configured backend
    """
    backend = settings.preferences.storage_backend

    if backend == "sqlite":
        engine = await init_db(settings.get_db_url())
        return SqlRecordStore(engine=engine)

    return JsonRecordStore(settings.get_records_path())
