"""Database module."""
from dispatch_ingestion.db.base import (
    Base,
    UUIDMixin,
    TimestampMixin,
    engine,
    async_session_maker,
    health_check,
)
from dispatch_ingestion.db.records_store import (
    RecordsStore,
    SqlRecordsStore,
    get_records_store,
)

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "engine",
    "async_session_maker",
    "health_check",
    "RecordsStore",
    "SqlRecordsStore",
    "get_records_store",
]
