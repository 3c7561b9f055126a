"""Sheet eligibility checks for the smart upload."""
from typing import Any, Sequence

from dispatch_ingestion.models.column_mapping import RequiredArchetypes
from dispatch_ingestion.services.column_mapper import normalize_headers


def is_sheet_eligible(header_row: Sequence[Any], archetypes: RequiredArchetypes) -> bool:
    """Whether a header row covers every required column concept.

    Matching is by substring: a header such as "Invoice No." satisfies the
    ("invoice", "inv") group. Every group needs at least one header.
    """
    normalized = normalize_headers(header_row)
    return all(
        any(variant in header for header in normalized for variant in group)
        for group in archetypes.groups
    )


def describe_ineligible_sheet(sheet_name: str, header_row: Sequence[Any], preview: int = 5) -> str:
    """Diagnostic for a skipped sheet listing its first few headers."""
    found = ", ".join(str(h) for h in list(header_row)[:preview])
    return f'Skipped sheet "{sheet_name}" - missing required columns. Found: {found}'
