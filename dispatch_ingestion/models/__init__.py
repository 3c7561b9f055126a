"""Pydantic validation models."""
from dispatch_ingestion.models.column_mapping import (
    ColumnMapping,
    RequiredArchetypes,
    RecordDefaults,
    DEFAULT_COLUMN_MAPPING,
    DEFAULT_REQUIRED_ARCHETYPES,
    DEFAULT_RECORD_DEFAULTS,
    TEMPLATE_COLUMNS,
    FIELD_LABELS,
)
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from dispatch_ingestion.models.ingestion import (
    UploadMode,
    IngestionStatus,
    RawSheet,
    ValidationOutcome,
    IngestionResult,
    is_blank_row,
    row_message,
)
from dispatch_ingestion.models.file_analysis import SheetAnalysis, FileAnalysis

__all__ = [
    # Mapping configuration
    "ColumnMapping",
    "RequiredArchetypes",
    "RecordDefaults",
    "DEFAULT_COLUMN_MAPPING",
    "DEFAULT_REQUIRED_ARCHETYPES",
    "DEFAULT_RECORD_DEFAULTS",
    "TEMPLATE_COLUMNS",
    "FIELD_LABELS",
    # Records
    "DispatchRecordCandidate",
    # Ingestion
    "UploadMode",
    "IngestionStatus",
    "RawSheet",
    "ValidationOutcome",
    "IngestionResult",
    "is_blank_row",
    "row_message",
    # Analysis
    "SheetAnalysis",
    "FileAnalysis",
]
