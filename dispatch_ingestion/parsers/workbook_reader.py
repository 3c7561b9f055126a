"""Excel workbook reader.

Decodes every worksheet into a matrix of text cells: no type coercion,
blanks as empty strings, whole numbers without a trailing ".0".
"""
import io
import re
from typing import Any, List

import pandas as pd
import structlog

from dispatch_ingestion.errors.exceptions import ParserError
from dispatch_ingestion.models.ingestion import RawSheet, is_blank_row
from dispatch_ingestion.parsers.file_intake import FileFormat

logger = structlog.get_logger(__name__)

# Engines by extension; xls needs the legacy xlrd reader
_ENGINES = {
    FileFormat.XLSX: 'openpyxl',
    FileFormat.XLS: 'xlrd',
}

_WHOLE_FLOAT = re.compile(r"^-?\d+\.0$")


def _cell_text(cell: Any) -> str:
    if cell is None:
        return ""
    if not isinstance(cell, str) and pd.isna(cell):
        return ""
    text = str(cell)
    if _WHOLE_FLOAT.match(text):
        text = text[:-2]
    return text


def _frame_to_rows(df: pd.DataFrame) -> List[List[str]]:
    rows = [[_cell_text(cell) for cell in row] for row in df.values.tolist()]
    return [row for row in rows if not is_blank_row(row)]


def read_workbook(content: bytes, file_format: FileFormat, first_only: bool = False) -> List[RawSheet]:
    """Read workbook bytes into sheets, in workbook order.

    Args:
        content: Raw file bytes
        file_format: XLSX or XLS
        first_only: Decode only the first worksheet

    Returns:
        List of RawSheet objects, blank rows removed

    Raises:
        ParserError: If the workbook cannot be decoded or has no sheets
    """
    engine = _ENGINES.get(file_format)
    if engine is None:
        raise ParserError(f"Not a workbook format: {file_format.value}")

    try:
        with pd.ExcelFile(io.BytesIO(content), engine=engine) as xl:
            sheet_names = list(xl.sheet_names)
            if not sheet_names:
                raise ParserError("No sheets found in Excel file")
            if first_only:
                sheet_names = sheet_names[:1]

            sheets: List[RawSheet] = []
            for sheet_name in sheet_names:
                df = xl.parse(
                    sheet_name=sheet_name,
                    header=None,
                    dtype=str,
                    na_values=[''],
                    keep_default_na=False,
                )
                rows = _frame_to_rows(df)
                logger.debug("sheet_read", sheet_name=str(sheet_name), row_count=len(rows))
                sheets.append(RawSheet(name=str(sheet_name), rows=rows, total_rows=len(df)))
    except ParserError:
        raise
    except Exception as e:
        raise ParserError(f"Unable to read Excel file: {e}") from e

    logger.info("workbook_read", sheet_count=len(sheets), sheets=[s.name for s in sheets])
    return sheets
