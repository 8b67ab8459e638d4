"""
Pytest configuration and fixtures.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from service_tracker.domain.ledger import ServiceLedger
from service_tracker.i18n import set_language
from service_tracker.infra.db import Base
from service_tracker.infra.repository import JsonRecordStore


class FakeClock:
    """Controllable replacement for the ledger's wall clock."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def english():
    """Every test starts with the English tables."""
    set_language("en")
    yield
    set_language("en")


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def ledger(clock):
    return ServiceLedger(clock=clock)


@pytest.fixture
def json_store(tmp_path):
    return JsonRecordStore(tmp_path / "records.json")


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
