"""Unit tests for the SQLAlchemy-backed records store (session mocked)."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from dispatch_ingestion.db.models.dispatch_record import DispatchRecord
from dispatch_ingestion.db.records_store import SqlRecordsStore
from dispatch_ingestion.errors.exceptions import DatabaseError
from dispatch_ingestion.services.row_normalizer import normalize_template_row
from tests.helpers import ACTOR_ID, template_row


def _session_factory(session):
    """Mimic async_session_maker: calling it yields an async context manager."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.commit = AsyncMock()
    mock_session.rollback = AsyncMock()
    return mock_session


@pytest.fixture
def candidates():
    return [
        normalize_template_row(template_row(invoice_no="INV-001"), ACTOR_ID),
        normalize_template_row(template_row(invoice_no="INV-002"), ACTOR_ID),
    ]


class TestSqlRecordsStore:
    """Test transactional writes."""

    @pytest.mark.asyncio
    async def test_insert_many_adds_all_and_commits_once(self, session, candidates):
        store = SqlRecordsStore(session_factory=_session_factory(session))

        written = await store.insert_many(candidates)

        assert written == 2
        rows = session.add_all.call_args[0][0]
        assert all(isinstance(r, DispatchRecord) for r in rows)
        assert [r.invoice_no for r in rows] == ["INV-001", "INV-002"]
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_insert_many_empty_batch_skips_database(self, session):
        factory = _session_factory(session)
        store = SqlRecordsStore(session_factory=factory)

        assert await store.insert_many([]) == 0
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_many_rolls_back_on_failure(self, session, candidates):
        session.commit.side_effect = Exception("deadlock detected")
        store = SqlRecordsStore(session_factory=_session_factory(session))

        with pytest.raises(DatabaseError) as exc_info:
            await store.insert_many(candidates)

        assert "deadlock detected" in exc_info.value.message
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_one(self, session, candidates):
        store = SqlRecordsStore(session_factory=_session_factory(session))

        await store.insert_one(candidates[0])

        row = session.add.call_args[0][0]
        assert row.created_by == ACTOR_ID
        assert row.item_category == "Plastics"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_one_raises_database_error(self, session, candidates):
        session.commit.side_effect = Exception("unique violation")
        store = SqlRecordsStore(session_factory=_session_factory(session))

        with pytest.raises(DatabaseError):
            await store.insert_one(candidates[0])

        session.rollback.assert_awaited_once()
