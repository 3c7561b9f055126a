"""File intake and cell parsing."""
from dispatch_ingestion.parsers.file_intake import (
    FileFormat,
    UploadedFile,
    resolve_file_format,
    check_upload,
)
from dispatch_ingestion.parsers.csv_reader import split_csv_line, read_csv_sheet
from dispatch_ingestion.parsers.workbook_reader import read_workbook
from dispatch_ingestion.parsers.sheet_loader import load_sheets
from dispatch_ingestion.parsers.value_parsers import (
    DateParseResult,
    parse_date,
    parse_date_detailed,
    parse_amount,
    parse_quantity,
    extract_text,
)

__all__ = [
    "FileFormat",
    "UploadedFile",
    "resolve_file_format",
    "check_upload",
    "split_csv_line",
    "read_csv_sheet",
    "read_workbook",
    "load_sheets",
    "DateParseResult",
    "parse_date",
    "parse_date_detailed",
    "parse_amount",
    "parse_quantity",
    "extract_text",
]
