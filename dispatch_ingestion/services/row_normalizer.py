"""Row normalization: raw cells to typed dispatch record candidates."""
from datetime import datetime, timezone
from typing import Any, Dict, Sequence

from dispatch_ingestion.models.column_mapping import (
    DEFAULT_RECORD_DEFAULTS,
    TEMPLATE_COLUMNS,
    RecordDefaults,
)
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from dispatch_ingestion.parsers.value_parsers import (
    extract_text,
    parse_amount,
    parse_date_detailed,
    parse_quantity,
)
from dispatch_ingestion.services.column_mapper import ColumnIndex

# Positional column index of the strict upload template
TEMPLATE_COLUMN_INDEX: ColumnIndex = {
    field_name: position for position, (field_name, _) in enumerate(TEMPLATE_COLUMNS)
}


def normalize_row(
    raw_row: Sequence[Any],
    column_index: ColumnIndex,
    actor_id: str,
    defaults: RecordDefaults = DEFAULT_RECORD_DEFAULTS,
) -> DispatchRecordCandidate:
    """Build a candidate record from one raw row.

    Args:
        raw_row: Cells of the data row
        column_index: Field -> column position (-1 when the sheet lacks it)
        actor_id: Uploading user, stored as created_by
        defaults: Fallbacks for blank state, country, payment status and
            booking type

    Returns:
        DispatchRecordCandidate, not yet validated
    """
    values: Dict[str, str] = {
        field_name: extract_text(raw_row, position)
        for field_name, position in column_index.items()
    }

    def text(field_name: str) -> str:
        return values.get(field_name, "")

    inv_date_raw = text('inv_date')
    inv_date = parse_date_detailed(inv_date_raw)
    now = datetime.now(timezone.utc)

    return DispatchRecordCandidate(
        company_name=text('company_name'),
        contact_person=text('contact_person'),
        contact_no=text('contact_no'),
        email=text('email'),
        record_ref=text('record_ref'),
        city=text('city'),
        district=text('district') or text('city'),
        state=text('state') or defaults.state,
        country=text('country') or defaults.country,
        invoice_no=text('invoice_no'),
        inv_date=inv_date.value,
        inv_date_raw=inv_date_raw,
        inv_date_parsed=inv_date.was_parsed,
        item_category=text('item_category'),
        item_subcategory=text('item_subcategory'),
        rate=parse_amount(text('rate')),
        qty=parse_quantity(text('qty')),
        amount=parse_amount(text('amount')),
        transporter_name=text('transporter_name'),
        paid_or_to_pay=text('paid_or_to_pay') or defaults.paid_or_to_pay,
        booking_type=text('booking_type') or defaults.booking_type,
        payment_details=text('payment_details'),
        created_by=actor_id,
        created_at=now,
        updated_at=now,
    )


def normalize_template_row(
    raw_row: Sequence[Any],
    actor_id: str,
    defaults: RecordDefaults = DEFAULT_RECORD_DEFAULTS,
) -> DispatchRecordCandidate:
    """Build a candidate from a row laid out in strict template column order."""
    return normalize_row(raw_row, TEMPLATE_COLUMN_INDEX, actor_id, defaults)
