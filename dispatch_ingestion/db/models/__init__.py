"""Database models for dispatch record storage."""
from dispatch_ingestion.db.models.dispatch_record import DispatchRecord

__all__ = [
    "DispatchRecord",
]
