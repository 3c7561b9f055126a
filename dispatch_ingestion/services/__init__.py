"""Business logic services."""
from dispatch_ingestion.services.column_mapper import (
    ColumnIndex,
    NOT_FOUND,
    normalize_headers,
    resolve_columns,
)
from dispatch_ingestion.services.sheet_gatekeeper import (
    is_sheet_eligible,
    describe_ineligible_sheet,
)
from dispatch_ingestion.services.row_normalizer import (
    TEMPLATE_COLUMN_INDEX,
    normalize_row,
    normalize_template_row,
)
from dispatch_ingestion.services.record_validator import (
    RecordValidator,
    REQUIRED_FIELDS,
    EMAIL_PATTERN,
)
from dispatch_ingestion.services.file_analyzer import analyze_file

__all__ = [
    # Column mapping
    "ColumnIndex",
    "NOT_FOUND",
    "normalize_headers",
    "resolve_columns",
    # Sheet eligibility
    "is_sheet_eligible",
    "describe_ineligible_sheet",
    # Row processing
    "TEMPLATE_COLUMN_INDEX",
    "normalize_row",
    "normalize_template_row",
    "RecordValidator",
    "REQUIRED_FIELDS",
    "EMAIL_PATTERN",
    # Analysis
    "analyze_file",
]
