"""Unit tests for mode-specific row validation."""
from datetime import datetime, timezone

import pytest

from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from dispatch_ingestion.models.ingestion import UploadMode, ValidationOutcome
from dispatch_ingestion.services.record_validator import RecordValidator
from tests.helpers import ACTOR_ID


def _candidate(**overrides) -> DispatchRecordCandidate:
    values = dict(
        company_name="Paras Polymers",
        contact_person="Mr. Neel",
        email="neel@paraspolymers.com",
        invoice_no="INV-001",
        item_category="Plastics",
        inv_date=datetime(2025, 1, 15, tzinfo=timezone.utc),
        inv_date_raw="15.01.2025",
        inv_date_parsed=True,
        created_by=ACTOR_ID,
    )
    values.update(overrides)
    return DispatchRecordCandidate(**values)


class TestStrictMode:
    """Strict template uploads require company name and item category."""

    def setup_method(self):
        self.validator = RecordValidator(UploadMode.STRICT)

    def test_valid_candidate_is_accepted(self):
        outcome = self.validator.validate(_candidate(), row_index=0, sheet_name="Sheet1")

        assert outcome.accepted is True
        assert outcome.row_number == 2
        assert outcome.reasons == []

    def test_missing_required_fields_are_listed(self):
        outcome = self.validator.validate(
            _candidate(company_name="", item_category=" "), row_index=3, sheet_name="Sheet1"
        )

        assert outcome.accepted is False
        assert outcome.reasons == ["Missing Company Name, Item Category"]
        assert outcome.message == 'Sheet "Sheet1", Row 5: Missing Company Name, Item Category'

    def test_contact_person_is_optional(self):
        outcome = self.validator.validate(_candidate(contact_person="", invoice_no=""), row_index=0)

        assert outcome.accepted is True


class TestSmartMode:
    """Smart uploads require company, contact person and invoice number."""

    def setup_method(self):
        self.validator = RecordValidator(UploadMode.SMART)

    def test_missing_contact_and_invoice(self):
        outcome = self.validator.validate(_candidate(contact_person="", invoice_no=""), row_index=0)

        assert outcome.reasons == ["Missing Contact Person, Invoice Number"]

    def test_item_category_is_optional(self):
        outcome = self.validator.validate(_candidate(item_category=""), row_index=0)

        assert outcome.accepted is True


class TestSharedRules:
    """Rules applied in every mode."""

    @pytest.mark.parametrize("mode", list(UploadMode))
    def test_malformed_email_is_rejected(self, mode):
        outcome = RecordValidator(mode).validate(_candidate(email="neel@nowhere"), row_index=0)

        assert outcome.reasons == ['Invalid email format: "neel@nowhere"']

    def test_empty_email_is_allowed(self):
        outcome = RecordValidator(UploadMode.SMART).validate(_candidate(email=""), row_index=0)

        assert outcome.accepted is True

    def test_only_first_failing_check_is_reported(self):
        outcome = RecordValidator(UploadMode.SMART).validate(
            _candidate(company_name="", email="bad", inv_date=None), row_index=1, sheet_name="Orders"
        )

        assert outcome.reasons == ["Missing Company Name"]
        assert outcome.message == 'Sheet "Orders", Row 3: Missing Company Name'

    def test_email_checked_before_date(self):
        outcome = RecordValidator(UploadMode.SMART).validate(
            _candidate(email="bad", inv_date=None), row_index=0
        )

        assert outcome.reasons == ['Invalid email format: "bad"']

    def test_missing_date_is_rejected(self):
        outcome = RecordValidator(UploadMode.SMART).validate(
            _candidate(inv_date=None, inv_date_raw="??"), row_index=0
        )

        assert outcome.reasons == ['Invalid date format: "??" (use DD.MM.YYYY or YYYY-MM-DD)']


class TestStrictDates:
    """Unrecognized date text is only rejected when strict_dates is enabled."""

    def test_fallback_date_accepted_by_default(self):
        candidate = _candidate(inv_date_raw="sometime", inv_date_parsed=False)

        outcome = RecordValidator(UploadMode.SMART).validate(candidate, row_index=0)

        assert outcome.accepted is True

    def test_fallback_date_rejected_when_strict(self):
        candidate = _candidate(inv_date_raw="sometime", inv_date_parsed=False)

        outcome = RecordValidator(UploadMode.SMART, strict_dates=True).validate(candidate, row_index=0)

        assert outcome.reasons == ['Invalid date format: "sometime" (use DD.MM.YYYY or YYYY-MM-DD)']

    def test_blank_date_accepted_when_strict(self):
        candidate = _candidate(inv_date_raw="", inv_date_parsed=False)

        outcome = RecordValidator(UploadMode.SMART, strict_dates=True).validate(candidate, row_index=0)

        assert outcome.accepted is True


class TestValidationOutcome:
    """Test the record-or-reasons invariant."""

    def test_cannot_carry_both(self):
        with pytest.raises(ValueError):
            ValidationOutcome(row_number=2, record=_candidate(), reasons=["x"])

    def test_cannot_carry_neither(self):
        with pytest.raises(ValueError):
            ValidationOutcome(row_number=2)
