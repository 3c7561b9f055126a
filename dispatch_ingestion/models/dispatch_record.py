"""Pydantic models for normalized dispatch records."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DispatchRecordCandidate(BaseModel):
    """Typed representation of one spreadsheet row before validation.

    Created per row by the row normalizer and consumed immediately by the
    validator. Text fields are trimmed strings (possibly empty); defaults for
    state, country, payment status and booking type have already been applied.

    Attributes:
        inv_date_raw: Date text exactly as found in the row, kept for messages
        inv_date_parsed: Whether inv_date came from the text rather than the
            upload-time fallback
    """

    company_name: str = ""
    contact_person: str = ""
    contact_no: str = ""
    email: str = ""
    record_ref: str = ""
    city: str = ""
    district: str = ""
    state: str = ""
    country: str = ""
    invoice_no: str = ""
    inv_date: datetime | None = None
    inv_date_raw: str = ""
    inv_date_parsed: bool = False
    item_category: str = ""
    item_subcategory: str = ""
    rate: Decimal = Decimal("0")
    qty: int = 0
    amount: Decimal = Decimal("0")
    transporter_name: str = ""
    paid_or_to_pay: str = ""
    booking_type: str = ""
    payment_details: str = ""
    created_by: str = Field(..., min_length=1, description="Actor who uploaded the row")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def to_document(self) -> Dict[str, Any]:
        """Return the persisted shape of the record (diagnostic fields dropped)."""
        return self.model_dump(exclude={'inv_date_raw', 'inv_date_parsed'})

    model_config = {
        "json_schema_extra": {
            "example": {
                "company_name": "Paras Polymers",
                "contact_person": "Mr. Neel",
                "email": "neel@paraspolymers.com",
                "city": "Ahmedabad",
                "district": "Ahmedabad",
                "state": "Gujarat",
                "country": "India",
                "invoice_no": "INV-2025-001",
                "inv_date": "2025-01-15T00:00:00Z",
                "item_category": "Plastic Granules",
                "rate": "150.50",
                "qty": 100,
                "amount": "15050",
                "paid_or_to_pay": "Paid",
                "booking_type": "Standard",
                "created_by": "user-123",
            }
        }
    }
