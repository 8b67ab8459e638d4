"""Infrastructure layer - Configuration and persistence"""

from .db import DatabaseEngine, ServiceRecordModel, init_db
from .repository import RecordStore, JsonRecordStore, SqlRecordStore, create_record_store

__all__ = [
    "DatabaseEngine", "ServiceRecordModel", "init_db",
    "RecordStore", "JsonRecordStore", "SqlRecordStore", "create_record_store",
]
