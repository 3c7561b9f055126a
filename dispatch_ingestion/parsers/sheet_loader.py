"""Decode an uploaded file into sheets using the strategy its format selects."""
from typing import List

from dispatch_ingestion.models.ingestion import RawSheet
from dispatch_ingestion.parsers.csv_reader import read_csv_sheet
from dispatch_ingestion.parsers.file_intake import FileFormat, UploadedFile
from dispatch_ingestion.parsers.workbook_reader import read_workbook


def load_sheets(upload: UploadedFile, file_format: FileFormat, first_only: bool = False) -> List[RawSheet]:
    """Decode an upload into sheets.

    CSV files become a single sheet named after the file stem.

    Raises:
        ParserError: If a workbook cannot be decoded
    """
    if file_format.is_workbook:
        return read_workbook(upload.content, file_format, first_only=first_only)
    return [read_csv_sheet(upload.content, upload.stem)]
