"""Error handling module."""
from dispatch_ingestion.errors.exceptions import (
    DataIngestionError,
    ParserError,
    UnsupportedFileError,
    FileSizeError,
    HeaderShapeError,
    ValidationError,
    DatabaseError,
)

__all__ = [
    "DataIngestionError",
    "ParserError",
    "UnsupportedFileError",
    "FileSizeError",
    "HeaderShapeError",
    "ValidationError",
    "DatabaseError",
]
