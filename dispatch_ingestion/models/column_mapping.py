"""Pydantic models for header mapping configuration.

Column mappings and required-column archetypes are immutable values passed
into the column mapper and sheet gatekeeper at call time, so alternative
tables can be used without touching module state.
"""
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColumnMapping(BaseModel):
    """Canonical field name -> accepted header spellings, in priority order.

    Synonyms are stored lower-cased and trimmed; a header cell matches a
    synonym only when its normalized text is equal to it.
    """

    model_config = ConfigDict(frozen=True)

    fields: Dict[str, Tuple[str, ...]] = Field(
        ...,
        min_length=1,
        description="Canonical field name to header synonyms"
    )

    @field_validator('fields')
    @classmethod
    def normalize_synonyms(cls, v: Dict[str, Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
        """Lower-case and trim every synonym, dropping blanks."""
        normalized = {}
        for field_name, synonyms in v.items():
            cleaned = tuple(s.strip().lower() for s in synonyms if s and s.strip())
            if not cleaned:
                raise ValueError(f"Field '{field_name}' has no header synonyms")
            normalized[field_name] = cleaned
        return normalized

    @property
    def field_names(self) -> List[str]:
        return list(self.fields.keys())


class RequiredArchetypes(BaseModel):
    """Groups of substring variants a sheet header row must cover.

    Each group stands for one required column concept; a header satisfies the
    group when it contains any of the group's variants.
    """

    model_config = ConfigDict(frozen=True)

    groups: Tuple[Tuple[str, ...], ...] = Field(
        ...,
        min_length=1,
        description="Required column concepts as substring variants"
    )

    @field_validator('groups')
    @classmethod
    def normalize_variants(cls, v: Tuple[Tuple[str, ...], ...]) -> Tuple[Tuple[str, ...], ...]:
        """Lower-case and trim every variant; empty groups are rejected."""
        normalized = []
        for group in v:
            cleaned = tuple(s.strip().lower() for s in group if s and s.strip())
            if not cleaned:
                raise ValueError("Archetype groups must contain at least one variant")
            normalized.append(cleaned)
        return tuple(normalized)


class RecordDefaults(BaseModel):
    """Fallback values applied when a row leaves a field blank."""

    model_config = ConfigDict(frozen=True)

    state: str = "Unknown"
    country: str = "India"
    paid_or_to_pay: str = "Paid"
    booking_type: str = "Standard"


DEFAULT_COLUMN_MAPPING = ColumnMapping(fields={
    'company_name': ('company name', 'campany name', 'company', 'firm name'),
    'contact_person': ('contact person', 'person', 'contact name'),
    'contact_no': ('contact no', 'contact number', 'phone', 'mobile'),
    'email': ('email', 'e-mail', 'email id'),
    'record_ref': (
        'gst no', 'gstin', 'reference', 'ref', 'folio no', 'folio',
        'order reference', 'order ref',
    ),
    'city': ('destination', 'city', 'location'),
    'district': ('district', 'dist'),
    'state': ('state',),
    'country': ('country',),
    'invoice_no': ('invoice no', 'inv no', 'invoice number', 'bill no'),
    'inv_date': ('inv date', 'invoice date', 'date', 'bill date'),
    'item_category': ('item category', 'category', 'product category'),
    'item_subcategory': ('item subcategory', 'subcategory', 'sub category', 'sub-category'),
    'rate': ('rate', 'price', 'unit price'),
    'qty': ('qty', 'quantity', 'units'),
    'amount': ('amount', 'total', 'value'),
    'transporter_name': ('transporter name', 'transporter', 'courier'),
    'paid_or_to_pay': ('paid or to pay', 'payment mode', 'payment type'),
    'booking_type': ('booking type', 'service type', 'type'),
    'payment_details': (
        'payment details', 'cod amt', 'cod amount', 'payment info', 'remarks',
        'payment cheque no', 'cheque no',
    ),
})

DEFAULT_REQUIRED_ARCHETYPES = RequiredArchetypes(groups=(
    ('company', 'campany'),
    ('contact person', 'person'),
    ('email', 'e-mail'),
    ('invoice', 'inv'),
))

DEFAULT_RECORD_DEFAULTS = RecordDefaults()

# Strict template layout: (canonical field, header label) in column order
TEMPLATE_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('company_name', 'Company Name'),
    ('contact_person', 'Contact Person'),
    ('contact_no', 'Contact Number'),
    ('email', 'Email'),
    ('record_ref', 'Record Reference'),
    ('country', 'Country'),
    ('state', 'State'),
    ('city', 'City'),
    ('district', 'District'),
    ('invoice_no', 'Invoice Number'),
    ('inv_date', 'Invoice Date (YYYY-MM-DD)'),
    ('item_category', 'Item Category'),
    ('item_subcategory', 'Item Subcategory'),
    ('rate', 'Rate'),
    ('qty', 'Quantity'),
    ('amount', 'Amount'),
    ('transporter_name', 'Transporter Name'),
    ('paid_or_to_pay', 'Payment Status (Paid/To Pay)'),
    ('booking_type', 'Booking Type'),
    ('payment_details', 'Payment Details'),
)

# Human-readable labels used in validation messages
FIELD_LABELS: Dict[str, str] = {
    'company_name': 'Company Name',
    'contact_person': 'Contact Person',
    'contact_no': 'Contact Number',
    'email': 'Email',
    'record_ref': 'Record Reference',
    'country': 'Country',
    'state': 'State',
    'city': 'City',
    'district': 'District',
    'invoice_no': 'Invoice Number',
    'inv_date': 'Invoice Date',
    'item_category': 'Item Category',
    'item_subcategory': 'Item Subcategory',
    'rate': 'Rate',
    'qty': 'Quantity',
    'amount': 'Amount',
    'transporter_name': 'Transporter Name',
    'paid_or_to_pay': 'Payment Status',
    'booking_type': 'Booking Type',
    'payment_details': 'Payment Details',
}
