"""Create owners, properties, tenants, leases and payments tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Initial schema of the rent ledger. Foreign keys carry no ON DELETE action:
a parent that still has children cannot be deleted, and lease deletion
removes its payments explicitly first.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


LEASE_STATUS = ('ACTIVE', 'EXPIRED', 'TERMINATED')
GUARANTEE_TYPE = ('DEPOSIT', 'SURETY_INSURANCE', 'GUARANTOR')
ADJUSTMENT_INDEX = ('IPCA', 'IGP-M', 'INPC', 'IVAR')
PAYMENT_STATUS = ('PENDING', 'RECEIVED', 'OVERDUE')
PAYMENT_METHOD = ('BILLING_PROVIDER', 'CASH', 'CARD', 'INSTANT_TRANSFER', 'OTHER')


def upgrade() -> None:
    """Create the ledger tables."""
    op.create_table(
        'owners',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('tax_id', sa.String(length=20), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('address_number', sa.String(length=20), nullable=True),
        sa.Column('province', sa.String(length=100), nullable=True),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=2), nullable=True),
        sa.Column('bank_info', sa.Text(), nullable=True),
        sa.Column('pix_key', sa.String(length=255), nullable=True),
        sa.Column('external_payout_account_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_owners'),
    )

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_properties'),
        sa.ForeignKeyConstraint(['owner_id'], ['owners.id'], name='fk_properties_owner_id'),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('tax_id', sa.String(length=20), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('external_customer_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_tenants'),
    )

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('value', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('due_day', sa.Integer(), nullable=False),
        sa.Column('adjustment_index', sa.Enum(*ADJUSTMENT_INDEX, name='adjustment_index'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.Enum(*LEASE_STATUS, name='lease_status'), nullable=False, server_default='ACTIVE'),
        sa.Column('guarantee_type', sa.Enum(*GUARANTEE_TYPE, name='guarantee_type'), nullable=True),
        sa.Column('guarantee_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('guarantee_charge_start_date', sa.Date(), nullable=True),
        sa.Column('termination_date', sa.Date(), nullable=True),
        sa.Column('key_return_date', sa.Date(), nullable=True),
        sa.Column('termination_reason', sa.Text(), nullable=True),
        sa.Column('termination_outstanding_debt', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('key_return_term_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('termination_contract_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('settlement_with_debt_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('settlement_without_debt_signed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('external_subscription_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_leases'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_leases_property_id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], name='fk_leases_tenant_id'),
    )
    op.create_index('ix_leases_property_id', 'leases', ['property_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('status', sa.Enum(*PAYMENT_STATUS, name='payment_status'), nullable=False, server_default='PENDING'),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('payment_date', sa.DateTime(), nullable=True),
        sa.Column(
            'payment_method',
            sa.Enum(*PAYMENT_METHOD, name='payment_method'),
            nullable=False,
            server_default='BILLING_PROVIDER'
        ),
        sa.Column('amount_received', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('external_payment_id', sa.String(length=100), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_payments'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_payments_lease_id'),
        sa.UniqueConstraint('external_payment_id', name='uq_payments_external_payment_id'),
    )

    # Create indexes for common queries
    op.create_index('ix_payments_lease_id', 'payments', ['lease_id'])
    op.create_index('ix_payments_status', 'payments', ['status'])
    op.create_index('ix_payments_due_date', 'payments', ['due_date'])


def downgrade() -> None:
    """Drop the ledger tables."""
    op.drop_index('ix_payments_due_date', table_name='payments')
    op.drop_index('ix_payments_status', table_name='payments')
    op.drop_index('ix_payments_lease_id', table_name='payments')
    op.drop_table('payments')

    op.drop_index('ix_leases_status', table_name='leases')
    op.drop_index('ix_leases_tenant_id', table_name='leases')
    op.drop_index('ix_leases_property_id', table_name='leases')
    op.drop_table('leases')

    op.drop_table('tenants')

    op.drop_index('ix_properties_owner_id', table_name='properties')
    op.drop_table('properties')
    op.drop_table('owners')

    # Drop the enum types (PostgreSQL only)
    if op.get_bind().dialect.name == 'postgresql':
        for enum_name in ('payment_method', 'payment_status', 'guarantee_type', 'lease_status', 'adjustment_index'):
            op.execute(f"DROP TYPE IF EXISTS {enum_name}")
