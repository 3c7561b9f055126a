"""DispatchRecord ORM model for committed upload rows."""
from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from dispatch_ingestion.db.base import Base, UUIDMixin, TimestampMixin
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from decimal import Decimal
from datetime import datetime


class DispatchRecord(Base, UUIDMixin, TimestampMixin):
    """DispatchRecord model representing one dispatched order line.

    Rows are written by the bulk upload pipeline only after validation;
    created_by holds the identifier of the uploading user.
    """

    __tablename__ = "dispatch_records"

    company_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    contact_no: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    record_ref: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    city: Mapped[str] = mapped_column(String(255), nullable=False, default="", index=True)
    district: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    country: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    invoice_no: Mapped[str] = mapped_column(String(100), nullable=False, default="", index=True)
    inv_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    item_category: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    item_subcategory: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    rate: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))
    qty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))
    transporter_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    paid_or_to_pay: Mapped[str] = mapped_column(String(50), nullable=False, default="Paid")
    booking_type: Mapped[str] = mapped_column(String(100), nullable=False, default="Standard")
    payment_details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_by: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    @classmethod
    def from_candidate(cls, candidate: DispatchRecordCandidate) -> "DispatchRecord":
        """Build an ORM row from a validated candidate."""
        return cls(**candidate.to_document())

    def __repr__(self) -> str:
        return f"<DispatchRecord(id={self.id}, company='{self.company_name}', invoice='{self.invoice_no}')>"
