"""Pydantic models for sheets, validation outcomes and ingestion results."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate


class UploadMode(str, Enum):
    """Supported bulk upload policies."""
    STRICT = "strict"  # single sheet, fixed template, all-or-nothing
    SMART = "smart"  # every sheet, header synonyms, best-effort


class IngestionStatus(str, Enum):
    """Final state of an ingestion run."""
    COMPLETED = "completed"
    REJECTED = "rejected"
    STORAGE_FAILED = "storage_failed"


def is_blank_row(row: List[str]) -> bool:
    """Whether every cell of a row is empty or whitespace."""
    return not any(cell and str(cell).strip() for cell in row)


class RawSheet(BaseModel):
    """One decoded sheet as a matrix of text cells.

    Readers drop fully blank rows before building a sheet, so the header is
    always row 0 of a non-empty sheet.
    """

    name: str
    rows: List[List[str]] = Field(default_factory=list)
    total_rows: int = Field(default=0, ge=0, description="Rows in the source, blank ones included")

    @property
    def header(self) -> List[str]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> List[List[str]]:
        return self.rows[1:]

    @property
    def has_data(self) -> bool:
        """A sheet needs a header plus at least one data row to be processed."""
        return len(self.rows) >= 2


class ValidationOutcome(BaseModel):
    """Either an accepted record or a rejected row with reasons, never both."""

    row_number: int = Field(..., ge=1, description="1-based display row number")
    sheet_name: str = ""
    record: Optional[DispatchRecordCandidate] = None
    reasons: List[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_exclusive(self) -> 'ValidationOutcome':
        if (self.record is None) == (not self.reasons):
            raise ValueError("ValidationOutcome must carry a record or reasons, not both")
        return self

    @classmethod
    def accept(cls, record: DispatchRecordCandidate, row_number: int, sheet_name: str = "") -> 'ValidationOutcome':
        return cls(record=record, row_number=row_number, sheet_name=sheet_name)

    @classmethod
    def reject(cls, reasons: List[str], row_number: int, sheet_name: str = "") -> 'ValidationOutcome':
        return cls(reasons=reasons, row_number=row_number, sheet_name=sheet_name)

    @property
    def accepted(self) -> bool:
        return self.record is not None

    @property
    def message(self) -> str:
        """Display message for a rejected row, tagged with sheet and row number."""
        return row_message(self.sheet_name, self.row_number, "; ".join(self.reasons))


def row_message(sheet_name: str, row_number: int, text: str) -> str:
    return f'Sheet "{sheet_name}", Row {row_number}: {text}'


class IngestionResult(BaseModel):
    """Summary returned to the caller of a bulk upload.

    Attributes:
        success: Rows committed to the records store
        failed: Rows rejected or not committed
        errors: Ordered human-readable messages
        sheets_processed: Sheets that passed the gatekeeper (smart mode only)
    """

    mode: UploadMode
    status: IngestionStatus = IngestionStatus.COMPLETED
    success: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    errors: List[str] = Field(default_factory=list)
    sheets_processed: Optional[List[str]] = None

    @property
    def total_processed(self) -> int:
        return self.success + self.failed
