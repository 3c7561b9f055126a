"""Uploaded file intake: format detection and size limits."""
from enum import Enum
from pathlib import PurePath
from typing import Optional

from pydantic import BaseModel, Field

from dispatch_ingestion.errors.exceptions import FileSizeError, ParserError, UnsupportedFileError


class FileFormat(str, Enum):
    """Upload formats, keyed by file extension."""
    CSV = "csv"
    XLSX = "xlsx"
    XLS = "xls"

    @property
    def is_workbook(self) -> bool:
        return self in (FileFormat.XLSX, FileFormat.XLS)


class UploadedFile(BaseModel):
    """Raw bytes of an uploaded file with its declared name."""

    filename: str = Field(..., min_length=1)
    content: bytes

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lstrip('.').lower()

    @property
    def stem(self) -> str:
        return PurePath(self.filename).stem or self.filename

    @property
    def size(self) -> int:
        return len(self.content)


def resolve_file_format(upload: UploadedFile) -> FileFormat:
    """Select the parsing strategy from the file extension.

    Raises:
        UnsupportedFileError: If the extension is not csv, xlsx or xls
    """
    try:
        return FileFormat(upload.extension)
    except ValueError:
        raise UnsupportedFileError(
            "Unsupported file format. Please use CSV, XLSX, or XLS",
            details={"filename": upload.filename},
        )


def check_upload(upload: UploadedFile, max_size_bytes: Optional[int] = None) -> FileFormat:
    """Validate an upload before any parsing.

    Returns:
        The file's format

    Raises:
        UnsupportedFileError: Unknown extension
        ParserError: Empty file
        FileSizeError: File larger than max_size_bytes
    """
    file_format = resolve_file_format(upload)

    if upload.size == 0:
        raise ParserError("Uploaded file is empty", details={"filename": upload.filename})

    if max_size_bytes is not None and upload.size > max_size_bytes:
        raise FileSizeError(
            f"File exceeds the maximum allowed size of {max_size_bytes // (1024 * 1024)} MB",
            details={"filename": upload.filename, "size": upload.size},
        )

    return file_format
