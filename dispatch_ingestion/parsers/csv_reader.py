"""Delimited-text reader for CSV uploads."""
import re
from typing import List

import structlog

from dispatch_ingestion.models.ingestion import RawSheet, is_blank_row

logger = structlog.get_logger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")
_BOM = "\ufeff"


def split_csv_line(line: str) -> List[str]:
    """Split one CSV line into trimmed fields.

    Double-quoted fields may contain commas, and a doubled quote inside a
    quoted field stands for a literal quote: ``a,"b,c","d""e"`` yields
    ``["a", "b,c", 'd"e']``.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]

        if char == '"' and in_quotes and i + 1 < len(line) and line[i + 1] == '"':
            current.append('"')
            i += 2
            continue

        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def decode_text(content: bytes) -> str:
    """Decode uploaded text as UTF-8, falling back to latin-1, without a BOM."""
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("utf8_decode_failed_trying_latin1", error=str(e))
        text = content.decode("latin-1")
    return text.lstrip(_BOM)


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def read_csv_sheet(content: bytes, name: str) -> RawSheet:
    """Read CSV bytes into a single sheet, dropping blank lines and rows.

    Args:
        content: Raw file bytes
        name: Sheet name used in row messages

    Returns:
        RawSheet whose first row is the header
    """
    all_lines = split_lines(decode_text(content))
    lines = [line for line in all_lines if line.strip()]
    rows = [split_csv_line(line) for line in lines]
    rows = [row for row in rows if not is_blank_row(row)]

    logger.debug("csv_rows_read", sheet_name=name, row_count=len(rows))
    return RawSheet(name=name, rows=rows, total_rows=len(all_lines))
