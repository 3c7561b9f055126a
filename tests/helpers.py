"""Shared builders for upload tests: records store fake, rows and files."""
import io
from typing import Dict, Iterable, List, Optional, Sequence

import openpyxl

from dispatch_ingestion.db.records_store import RecordsStore
from dispatch_ingestion.errors.exceptions import DatabaseError
from dispatch_ingestion.models.column_mapping import TEMPLATE_COLUMNS
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate

ACTOR_ID = "user-123"

TEMPLATE_HEADERS = [label for _, label in TEMPLATE_COLUMNS]

SMART_HEADERS = [
    "Company Name", "Contact Person", "Email", "Invoice No", "Invoice Date",
    "Destination", "Qty", "Amount",
]


class FakeRecordsStore(RecordsStore):
    """In-memory RecordsStore that records calls.

    Args:
        fail_batches: Make insert_many raise DatabaseError
        fail_invoices: Invoice numbers for which insert_one raises
    """

    def __init__(self, fail_batches: bool = False, fail_invoices: Iterable[str] = ()):
        self.fail_batches = fail_batches
        self.fail_invoices = set(fail_invoices)
        self.records: List[DispatchRecordCandidate] = []
        self.insert_many_calls = 0
        self.insert_one_calls = 0

    async def insert_many(self, records: List[DispatchRecordCandidate]) -> int:
        self.insert_many_calls += 1
        if self.fail_batches:
            raise DatabaseError("connection reset by peer")
        self.records.extend(records)
        return len(records)

    async def insert_one(self, record: DispatchRecordCandidate) -> None:
        self.insert_one_calls += 1
        if record.invoice_no in self.fail_invoices:
            raise DatabaseError(f"duplicate key for {record.invoice_no}")
        self.records.append(record)


def template_row(**overrides: str) -> List[str]:
    """A valid strict-template row; keyword arguments replace fields by name."""
    values = {
        'company_name': "Paras Polymers",
        'contact_person': "Mr. Neel",
        'contact_no': "+91 7201877472",
        'email': "neel@paraspolymers.com",
        'record_ref': "By Phone",
        'country': "India",
        'state': "Gujarat",
        'city': "Ahmedabad",
        'district': "Ahmedabad",
        'invoice_no': "INV-001",
        'inv_date': "15.01.2025",
        'item_category': "Plastics",
        'item_subcategory': "Granules",
        'rate': "150.50",
        'qty': "100",
        'amount': "15050",
        'transporter_name': "DTDC Courier",
        'paid_or_to_pay': "Paid",
        'booking_type': "Standard",
        'payment_details': "Advance received",
    }
    values.update(overrides)
    return [values[field_name] for field_name, _ in TEMPLATE_COLUMNS]


def smart_row(company: str = "Paras Polymers", person: str = "Mr. Neel",
              email: str = "neel@paraspolymers.com", invoice: str = "INV-001",
              date: str = "2025-01-15", city: str = "Ahmedabad",
              qty: str = "10", amount: str = "1500") -> List[str]:
    """A row laid out under SMART_HEADERS."""
    return [company, person, email, invoice, date, city, qty, amount]


def csv_bytes(rows: Sequence[Sequence[str]]) -> bytes:
    return "\n".join(",".join(row) for row in rows).encode("utf-8")


def xlsx_bytes(sheets: Dict[str, Sequence[Sequence[Optional[object]]]]) -> bytes:
    """Build an in-memory .xlsx workbook, sheets in insertion order."""
    wb = openpyxl.Workbook()
    first = True
    for name, rows in sheets.items():
        if first:
            ws = wb.active
            ws.title = name
            first = False
        else:
            ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(list(row))

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


