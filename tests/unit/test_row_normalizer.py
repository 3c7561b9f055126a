"""Unit tests for raw row to candidate normalization."""
from datetime import datetime, timezone
from decimal import Decimal

from dispatch_ingestion.models.column_mapping import DEFAULT_COLUMN_MAPPING, RecordDefaults
from dispatch_ingestion.services.column_mapper import resolve_columns
from dispatch_ingestion.services.row_normalizer import normalize_row, normalize_template_row
from tests.helpers import ACTOR_ID, SMART_HEADERS, smart_row, template_row


class TestNormalizeRow:
    """Test normalize_row() with a resolved column index."""

    def setup_method(self):
        self.column_index = resolve_columns(SMART_HEADERS, DEFAULT_COLUMN_MAPPING)

    def test_maps_text_fields(self):
        candidate = normalize_row(smart_row(), self.column_index, ACTOR_ID)

        assert candidate.company_name == "Paras Polymers"
        assert candidate.contact_person == "Mr. Neel"
        assert candidate.invoice_no == "INV-001"
        assert candidate.city == "Ahmedabad"
        assert candidate.created_by == ACTOR_ID

    def test_district_falls_back_to_city(self):
        candidate = normalize_row(smart_row(city="Surat"), self.column_index, ACTOR_ID)

        assert candidate.district == "Surat"

    def test_blank_fields_take_defaults(self):
        candidate = normalize_row(smart_row(), self.column_index, ACTOR_ID)

        assert candidate.state == "Unknown"
        assert candidate.country == "India"
        assert candidate.paid_or_to_pay == "Paid"
        assert candidate.booking_type == "Standard"

    def test_custom_defaults(self):
        defaults = RecordDefaults(country="Nepal", booking_type="Express")

        candidate = normalize_row(smart_row(), self.column_index, ACTOR_ID, defaults)

        assert candidate.country == "Nepal"
        assert candidate.booking_type == "Express"

    def test_numeric_fields_are_coerced(self):
        candidate = normalize_row(
            smart_row(qty="12 pcs", amount="₹1,000+500"), self.column_index, ACTOR_ID
        )

        assert candidate.qty == 12
        assert candidate.amount == Decimal("1500")
        assert candidate.rate == Decimal("0")

    def test_date_is_parsed_and_raw_text_kept(self):
        candidate = normalize_row(smart_row(date="15.01.2025"), self.column_index, ACTOR_ID)

        assert candidate.inv_date == datetime(2025, 1, 15, tzinfo=timezone.utc)
        assert candidate.inv_date_raw == "15.01.2025"
        assert candidate.inv_date_parsed is True

    def test_unparseable_date_is_flagged(self):
        candidate = normalize_row(smart_row(date="sometime"), self.column_index, ACTOR_ID)

        assert candidate.inv_date is not None
        assert candidate.inv_date_parsed is False

    def test_timestamps_match(self):
        candidate = normalize_row(smart_row(), self.column_index, ACTOR_ID)

        assert candidate.created_at == candidate.updated_at
        assert candidate.created_at.tzinfo is not None

    def test_short_rows_leave_fields_empty(self):
        candidate = normalize_row(["Only Company"], self.column_index, ACTOR_ID)

        assert candidate.company_name == "Only Company"
        assert candidate.email == ""
        assert candidate.qty == 0


class TestNormalizeTemplateRow:
    """Test positional template normalization."""

    def test_reads_columns_by_position(self):
        candidate = normalize_template_row(template_row(), ACTOR_ID)

        assert candidate.company_name == "Paras Polymers"
        assert candidate.state == "Gujarat"
        assert candidate.item_category == "Plastics"
        assert candidate.item_subcategory == "Granules"
        assert candidate.rate == Decimal("150.50")
        assert candidate.qty == 100
        assert candidate.amount == Decimal("15050")
        assert candidate.payment_details == "Advance received"

    def test_to_document_drops_diagnostic_fields(self):
        document = normalize_template_row(template_row(), ACTOR_ID).to_document()

        assert "inv_date_raw" not in document
        assert "inv_date_parsed" not in document
        assert document['created_by'] == ACTOR_ID
