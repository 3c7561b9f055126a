"""Header-to-field column resolution."""
from typing import Any, Dict, List, Sequence

import structlog

from dispatch_ingestion.models.column_mapping import ColumnMapping

logger = structlog.get_logger(__name__)

# Canonical field name -> zero-based column position, NOT_FOUND when absent
ColumnIndex = Dict[str, int]

NOT_FOUND = -1


def normalize_headers(header_row: Sequence[Any]) -> List[str]:
    """Lower-case and trim header cells; null cells become ""."""
    return [str(h).strip().lower() if h is not None else "" for h in header_row]


def resolve_columns(header_row: Sequence[Any], mapping: ColumnMapping) -> ColumnIndex:
    """Map every canonical field of a mapping table to a column of this sheet.

    For each field the synonyms are tried in declaration order and the first
    synonym equal to a normalized header cell wins, so with headers
    ``["Company", "Firm Name"]`` and synonyms ``company name, company,
    firm name`` the field resolves to column 0.

    Args:
        header_row: Raw header cells of the sheet
        mapping: Canonical field -> accepted header spellings

    Returns:
        ColumnIndex with an entry for every mapped field
    """
    normalized = normalize_headers(header_row)
    column_index: ColumnIndex = {}

    for field_name, synonyms in mapping.fields.items():
        column_index[field_name] = NOT_FOUND
        for synonym in synonyms:
            try:
                column_index[field_name] = normalized.index(synonym)
                break
            except ValueError:
                continue

    logger.debug(
        "column_mapping_complete",
        mapped={k: v for k, v in column_index.items() if v != NOT_FOUND},
        unmapped=[k for k, v in column_index.items() if v == NOT_FOUND],
    )
    return column_index
