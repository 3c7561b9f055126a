"""Pydantic models for pre-upload file analysis."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SheetAnalysis(BaseModel):
    """Shape of a single workbook sheet as the smart upload would see it."""

    name: str
    total_rows: int = Field(default=0, ge=0)
    non_empty_rows: int = Field(default=0, ge=0)
    first_row: List[str] = Field(default_factory=list)
    column_count: int = Field(default=0, ge=0)
    preview: List[List[str]] = Field(default_factory=list)
    eligible: bool = False
    column_index: Dict[str, int] = Field(default_factory=dict)


class FileAnalysis(BaseModel):
    """Read-only report on an uploaded file.

    CSV files fill the line-oriented fields; workbooks fill the sheet fields.
    """

    file_name: str
    file_size: int = Field(default=0, ge=0)
    file_type: str

    # CSV
    total_lines: Optional[int] = None
    first_line: Optional[str] = None
    header_columns: Optional[int] = None
    lines_preview: Optional[List[str]] = None

    # Workbook
    total_sheets: Optional[int] = None
    sheet_names: Optional[List[str]] = None
    sheets: Optional[List[SheetAnalysis]] = None
    first_sheet_name: Optional[str] = None
    first_sheet_columns: Optional[int] = None
    first_sheet_rows: Optional[int] = None
