"""Pre-upload file analysis.

Reports how an uploaded file would look to the upload pipeline without
writing anything: line counts and a preview for CSV, and per-sheet shape,
gatekeeper eligibility and resolved columns for workbooks.
"""
from typing import Optional

import structlog

from dispatch_ingestion.config import UploadSettings, settings, upload_settings
from dispatch_ingestion.models.column_mapping import (
    DEFAULT_COLUMN_MAPPING,
    DEFAULT_REQUIRED_ARCHETYPES,
    ColumnMapping,
    RequiredArchetypes,
)
from dispatch_ingestion.models.file_analysis import FileAnalysis, SheetAnalysis
from dispatch_ingestion.models.ingestion import RawSheet
from dispatch_ingestion.parsers.csv_reader import decode_text, split_csv_line, split_lines
from dispatch_ingestion.parsers.file_intake import FileFormat, UploadedFile, check_upload
from dispatch_ingestion.parsers.workbook_reader import read_workbook
from dispatch_ingestion.services.column_mapper import resolve_columns
from dispatch_ingestion.services.sheet_gatekeeper import is_sheet_eligible

logger = structlog.get_logger(__name__)


def _analyze_sheet(
    sheet: RawSheet,
    preview_rows: int,
    mapping: ColumnMapping,
    archetypes: RequiredArchetypes,
) -> SheetAnalysis:
    header = sheet.header
    return SheetAnalysis(
        name=sheet.name,
        total_rows=sheet.total_rows,
        non_empty_rows=len(sheet.rows),
        first_row=header,
        column_count=len(header),
        preview=sheet.rows[:preview_rows],
        eligible=bool(header) and is_sheet_eligible(header, archetypes),
        column_index=resolve_columns(header, mapping) if header else {},
    )


def analyze_file(
    upload: UploadedFile,
    config: UploadSettings = upload_settings,
    mapping: ColumnMapping = DEFAULT_COLUMN_MAPPING,
    archetypes: RequiredArchetypes = DEFAULT_REQUIRED_ARCHETYPES,
    max_file_size_bytes: Optional[int] = None,
) -> FileAnalysis:
    """Describe an uploaded file.

    Raises:
        UnsupportedFileError: Unknown extension
        ParserError: Empty file or undecodable workbook
    """
    limit = max_file_size_bytes if max_file_size_bytes is not None else settings.max_file_size_bytes
    file_format = check_upload(upload, limit)
    preview_rows = config.sheet_preview_rows

    analysis = FileAnalysis(
        file_name=upload.filename,
        file_size=upload.size,
        file_type=file_format.value,
    )

    if file_format is FileFormat.CSV:
        lines = split_lines(decode_text(upload.content))
        first_line = lines[0] if lines else ""
        analysis.total_lines = len(lines)
        analysis.first_line = first_line
        analysis.header_columns = len(split_csv_line(first_line)) if first_line else 0
        analysis.lines_preview = lines[:preview_rows]
    else:
        sheets = read_workbook(upload.content, file_format)
        analysis.total_sheets = len(sheets)
        analysis.sheet_names = [s.name for s in sheets]
        analysis.sheets = [_analyze_sheet(s, preview_rows, mapping, archetypes) for s in sheets]

        first = analysis.sheets[0]
        analysis.first_sheet_name = first.name
        analysis.first_sheet_columns = first.column_count
        analysis.first_sheet_rows = first.non_empty_rows

    logger.info(
        "file_analyzed",
        filename=upload.filename,
        file_type=file_format.value,
        sheets=analysis.sheet_names,
    )
    return analysis
