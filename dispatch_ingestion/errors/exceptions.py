"""Custom exception hierarchy for bulk upload errors."""
from typing import Any, Dict, Optional


class DataIngestionError(Exception):
    """Base exception for all data ingestion errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with message and optional structured details."""
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ParserError(DataIngestionError):
    """Raised when an uploaded file cannot be decoded into sheets."""
    pass


class UnsupportedFileError(ParserError):
    """Raised when the file extension selects no known parsing strategy."""
    pass


class FileSizeError(ParserError):
    """Raised when a file exceeds the maximum allowed size."""
    pass


class HeaderShapeError(ParserError):
    """Raised when a strict template header has fewer columns than expected."""
    pass


class ValidationError(DataIngestionError):
    """Raised when data validation fails."""
    pass


class DatabaseError(DataIngestionError):
    """Raised when database operations fail."""
    pass
