"""Bulk upload orchestration."""
from dispatch_ingestion.services.ingestion.policies import (
    IngestionOptions,
    IngestionPolicy,
    AllOrNothingPolicy,
    BestEffortPolicy,
)
from dispatch_ingestion.services.ingestion.orchestrator import (
    IngestionOrchestrator,
    get_policy,
)

__all__ = [
    "IngestionOptions",
    "IngestionPolicy",
    "AllOrNothingPolicy",
    "BestEffortPolicy",
    "IngestionOrchestrator",
    "get_policy",
]
