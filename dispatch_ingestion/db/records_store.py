"""Records store: the two write shapes used by the upload pipeline.

The pipeline depends only on RecordsStore; SqlRecordsStore is the
PostgreSQL-backed implementation used by the API.
"""
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_ingestion.db.base import async_session_maker
from dispatch_ingestion.db.models.dispatch_record import DispatchRecord
from dispatch_ingestion.errors.exceptions import DatabaseError
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate

logger = structlog.get_logger(__name__)


class RecordsStore(ABC):
    """Abstract destination for validated dispatch records.

    Implementations must make a write durable before returning and raise on
    failure; they are not expected to deduplicate concurrent uploads.
    """

    @abstractmethod
    async def insert_many(self, records: List[DispatchRecordCandidate]) -> int:
        """Persist a batch atomically.

        Returns:
            Number of records written

        Raises:
            DatabaseError: If the batch could not be written (nothing persisted)
        """
        pass

    @abstractmethod
    async def insert_one(self, record: DispatchRecordCandidate) -> None:
        """Persist a single record.

        Raises:
            DatabaseError: If the record could not be written
        """
        pass


class SqlRecordsStore(RecordsStore):
    """RecordsStore backed by the dispatch_records table."""

    def __init__(self, session_factory: Optional[Callable[[], AsyncSession]] = None):
        self._session_factory = session_factory or async_session_maker

    async def insert_many(self, records: List[DispatchRecordCandidate]) -> int:
        if not records:
            return 0

        async with self._session_factory() as session:
            try:
                session.add_all([DispatchRecord.from_candidate(r) for r in records])
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error(
                    "insert_many_failed",
                    record_count=len(records),
                    error=str(e),
                    error_type=type(e).__name__
                )
                raise DatabaseError(f"Failed to insert records: {e}") from e

        logger.info("records_inserted", record_count=len(records))
        return len(records)

    async def insert_one(self, record: DispatchRecordCandidate) -> None:
        async with self._session_factory() as session:
            try:
                session.add(DispatchRecord.from_candidate(record))
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error(
                    "insert_one_failed",
                    invoice_no=record.invoice_no,
                    error=str(e),
                    error_type=type(e).__name__
                )
                raise DatabaseError(f"Failed to insert record: {e}") from e


def get_records_store() -> RecordsStore:
    """Dependency factory for the default records store."""
    return SqlRecordsStore()
