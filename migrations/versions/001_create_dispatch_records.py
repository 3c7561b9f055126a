"""Create dispatch_records table

Revision ID: 001_create_dispatch_records
Revises:
Create Date: 2025-01-20 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_create_dispatch_records'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'dispatch_records',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('contact_no', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('email', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('record_ref', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('city', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('district', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('state', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('country', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('invoice_no', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('inv_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('item_category', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('item_subcategory', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('rate', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('qty', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('amount', sa.Numeric(precision=14, scale=2), nullable=False, server_default='0'),
        sa.Column('transporter_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('paid_or_to_pay', sa.String(length=50), nullable=False, server_default='Paid'),
        sa.Column('booking_type', sa.String(length=100), nullable=False, server_default='Standard'),
        sa.Column('payment_details', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_by', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_dispatch_records_company_name', 'dispatch_records', ['company_name'])
    op.create_index('ix_dispatch_records_city', 'dispatch_records', ['city'])
    op.create_index('ix_dispatch_records_invoice_no', 'dispatch_records', ['invoice_no'])
    op.create_index('ix_dispatch_records_created_by', 'dispatch_records', ['created_by'])
    op.create_index('idx_dispatch_records_inv_date', 'dispatch_records', ['inv_date'], postgresql_ops={'inv_date': 'DESC'})


def downgrade() -> None:
    op.drop_table('dispatch_records')
