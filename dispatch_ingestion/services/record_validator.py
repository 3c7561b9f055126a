"""Row-level validation of candidate dispatch records."""
import re
from typing import Dict, List, Tuple

from dispatch_ingestion.models.column_mapping import FIELD_LABELS
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from dispatch_ingestion.models.ingestion import UploadMode, ValidationOutcome

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS: Dict[UploadMode, Tuple[str, ...]] = {
    UploadMode.STRICT: ('company_name', 'item_category'),
    UploadMode.SMART: ('company_name', 'contact_person', 'invoice_no'),
}

# Header row plus zero-based data index
ROW_NUMBER_OFFSET = 2


class RecordValidator:
    """Validates candidates against the rules of one upload mode.

    Every mode rejects a malformed email (when one is given) and a missing
    date. With strict_dates enabled, date text that matched no known format
    is rejected too instead of silently becoming the upload time.
    """

    def __init__(self, mode: UploadMode, strict_dates: bool = False):
        self.mode = mode
        self.strict_dates = strict_dates
        self.required_fields = REQUIRED_FIELDS[mode]

    def validate(
        self,
        candidate: DispatchRecordCandidate,
        row_index: int,
        sheet_name: str = "",
    ) -> ValidationOutcome:
        """Accept or reject one candidate.

        Args:
            candidate: Normalized row
            row_index: Zero-based position among the sheet's data rows
            sheet_name: Sheet the row came from

        Returns:
            ValidationOutcome with the display row number (row_index + 2)
        """
        row_number = row_index + ROW_NUMBER_OFFSET
        reasons = self.collect_reasons(candidate)
        if reasons:
            return ValidationOutcome.reject(reasons, row_number, sheet_name)
        return ValidationOutcome.accept(candidate, row_number, sheet_name)

    def collect_reasons(self, candidate: DispatchRecordCandidate) -> List[str]:
        """Reason for the first failing check, in order: required fields, email, date."""
        missing = [
            FIELD_LABELS[field_name]
            for field_name in self.required_fields
            if not getattr(candidate, field_name).strip()
        ]
        if missing:
            return [f"Missing {', '.join(missing)}"]

        if candidate.email and not EMAIL_PATTERN.match(candidate.email):
            return [f'Invalid email format: "{candidate.email}"']

        if self._has_invalid_date(candidate):
            return [
                f'Invalid date format: "{candidate.inv_date_raw}" (use DD.MM.YYYY or YYYY-MM-DD)'
            ]

        return []

    def _has_invalid_date(self, candidate: DispatchRecordCandidate) -> bool:
        if candidate.inv_date is None:
            return True
        return self.strict_dates and bool(candidate.inv_date_raw) and not candidate.inv_date_parsed
