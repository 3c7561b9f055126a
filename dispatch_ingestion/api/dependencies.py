"""
API Dependencies
================

Identity context and service wiring for the upload routes.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from dispatch_ingestion.db.records_store import RecordsStore, get_records_store
from dispatch_ingestion.services.ingestion import IngestionOrchestrator


async def get_current_actor(
    x_actor_id: Annotated[str | None, Header()] = None,
) -> str:
    """
    Resolve the authenticated uploader.

    Session handling lives in front of this service; it forwards the user
    identifier in the X-Actor-Id header.

    Raises:
        HTTPException: 401 when no actor is present
    """
    if not x_actor_id or not x_actor_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return x_actor_id.strip()


def get_orchestrator(
    store: Annotated[RecordsStore, Depends(get_records_store)],
) -> IngestionOrchestrator:
    """Build an orchestrator bound to the request's records store."""
    return IngestionOrchestrator(store)
